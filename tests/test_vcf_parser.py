"""Tests for VCF reading: variant typing and genotype matrix encoding."""

from types import SimpleNamespace

import pytest

from hwe_counts.genotypes import GT_MISSING, INT32_VECTOR_END, GenotypeBuffer, encode_allele
from hwe_counts.models import VariantType
from hwe_counts.vcf_parser import (
    VariantReader,
    classify_variant_type,
    encode_sample_genotype,
    fill_genotype_buffer,
)


def _sample_codes(buffer, sample_idx):
    start = sample_idx * buffer.ploidy
    return buffer.codes[start : start + buffer.ploidy]


class TestClassifyVariantType:
    """Test htslib-style variant type classification."""

    def test_snp(self):
        assert classify_variant_type("A", ["G"]) == VariantType.SNP

    def test_snp_case_insensitive_match(self):
        assert classify_variant_type("a", ["A"]) == VariantType.REF

    def test_mnp(self):
        assert classify_variant_type("AT", ["GC"]) == VariantType.MNP

    def test_padded_snp(self):
        assert classify_variant_type("AT", ["AC"]) == VariantType.SNP

    def test_deletion(self):
        assert classify_variant_type("AT", ["A"]) == VariantType.INDEL

    def test_insertion(self):
        assert classify_variant_type("A", ["ATT"]) == VariantType.INDEL

    def test_symbolic_other(self):
        assert classify_variant_type("A", ["<DEL>"]) == VariantType.OTHER

    def test_gvcf_ref_block(self):
        assert classify_variant_type("A", ["<NON_REF>"]) == VariantType.REF
        assert classify_variant_type("A", ["<*>"]) == VariantType.REF

    def test_overlap(self):
        assert classify_variant_type("A", ["*"]) == VariantType.OVERLAP

    def test_breakend(self):
        assert classify_variant_type("G", ["G]chr2:321682]"]) == VariantType.BND

    def test_multiple_alts_are_combined(self):
        variant_type = classify_variant_type("A", ["G", "AT"])
        assert variant_type == VariantType.SNP | VariantType.INDEL
        assert int(variant_type) == 5

    def test_no_alts(self):
        assert classify_variant_type("A", []) == VariantType.REF

    def test_none_alts_ignored(self):
        assert classify_variant_type("A", [None, "C"]) == VariantType.SNP


class TestEncodeSampleGenotype:
    """Test conversion of cyvcf2 genotype entries to BCF codes."""

    def test_unphased_diploid(self):
        assert encode_sample_genotype([0, 1, False], 2) == [encode_allele(0), encode_allele(1)]

    def test_phased_diploid_phase_on_second(self):
        codes = encode_sample_genotype([0, 1, True], 2)
        assert codes == [encode_allele(0), encode_allele(1, phased=True)]

    def test_missing_alleles(self):
        assert encode_sample_genotype([-1, -1, False], 2) == [GT_MISSING, GT_MISSING]

    def test_short_entry_padded_with_vector_end(self):
        assert encode_sample_genotype([1, False], 2) == [encode_allele(1), INT32_VECTOR_END]

    def test_cyvcf2_vector_end_marker(self):
        assert encode_sample_genotype([0, -2, False], 2) == [encode_allele(0), INT32_VECTOR_END]


class TestFillGenotypeBuffer:
    def test_fills_diploid_matrix(self):
        buffer = GenotypeBuffer()
        fill_genotype_buffer([[0, 0, False], [0, 1, True], [1, 1, False]], buffer)

        assert buffer.ploidy == 2
        assert buffer.n_samples == 3
        assert _sample_codes(buffer, 1) == [encode_allele(0), encode_allele(1, phased=True)]

    def test_mixed_ploidy_uses_widest_sample(self):
        buffer = GenotypeBuffer()
        fill_genotype_buffer([[0, False], [0, 1, False]], buffer)

        assert buffer.ploidy == 2
        assert _sample_codes(buffer, 0) == [encode_allele(0), INT32_VECTOR_END]

    def test_triploid(self):
        buffer = GenotypeBuffer()
        fill_genotype_buffer([[0, 0, 1, False]], buffer)
        assert buffer.ploidy == 3

    def test_no_genotypes(self):
        buffer = GenotypeBuffer(10)
        fill_genotype_buffer(None, buffer)
        assert buffer.ploidy == 0
        assert buffer.capacity == 10

    def test_reuse_keeps_capacity(self):
        buffer = GenotypeBuffer()
        fill_genotype_buffer([[0, 0, False]] * 50, buffer)
        fill_genotype_buffer([[1, 1, False]] * 2, buffer)
        assert buffer.capacity == 100
        assert buffer.n_samples == 2


class TestVariantReaderRecords:
    """Test record construction from cyvcf2-like variants."""

    def _variant(self, **kwargs):
        defaults = {
            "CHROM": "chr1",
            "start": 99,
            "REF": "A",
            "ALT": ["G"],
            "ID": None,
            "FORMAT": ["GT"],
            "genotypes": [[0, 1, False], [1, 1, False]],
        }
        defaults.update(kwargs)
        return SimpleNamespace(**defaults)

    def test_to_record(self):
        reader = VariantReader("unused.vcf")
        buffer = GenotypeBuffer()
        record = reader._to_record(self._variant(), 2, buffer)

        assert record.pos == 99
        assert record.alleles == ["A", "G"]
        assert record.variant_type == VariantType.SNP
        assert buffer.ploidy == 2
        assert record.has_genotypes is True
        assert buffer.n_samples == 2

    def test_no_gt_format(self):
        reader = VariantReader("unused.vcf")
        buffer = GenotypeBuffer()
        record = reader._to_record(self._variant(FORMAT=["DP"]), 2, buffer)

        assert record.has_genotypes is False
        assert buffer.ploidy == 0

    def test_no_samples(self):
        reader = VariantReader("unused.vcf")
        record = reader._to_record(self._variant(FORMAT=None), 0, GenotypeBuffer())
        assert record.has_genotypes is False


@pytest.mark.integration
class TestVariantReaderFile:
    """Read generated VCFs through cyvcf2."""

    def test_samples(self, cohort_vcf_file, cohort_samples):
        with VariantReader(cohort_vcf_file) as reader:
            assert reader.samples == cohort_samples

    def test_records_in_order(self, cohort_vcf_file):
        buffer = GenotypeBuffer()
        with VariantReader(cohort_vcf_file) as reader:
            positions = [record.pos for record in reader.records(buffer)]
        assert positions == [99, 199, 299, 399, 499]

    def test_ploidy_per_record(self, cohort_vcf_file):
        buffer = GenotypeBuffer()
        with VariantReader(cohort_vcf_file) as reader:
            ploidies = [buffer.ploidy for _ in reader.records(buffer)]
        assert ploidies == [2, 2, 2, 3, 2]

    def test_genotype_codes(self, cohort_vcf_file):
        buffer = GenotypeBuffer()
        with VariantReader(cohort_vcf_file) as reader:
            next(reader.records(buffer))
            assert _sample_codes(buffer, 0) == [encode_allele(0), encode_allele(0)]
            assert _sample_codes(buffer, 2) == [encode_allele(1), encode_allele(1)]
            assert _sample_codes(buffer, 3) == [GT_MISSING, GT_MISSING]

    def test_sample_subset(self, cohort_vcf_file):
        buffer = GenotypeBuffer()
        with VariantReader(cohort_vcf_file, samples=["S1", "S3"]) as reader:
            assert reader.samples == ["S1", "S3"]
            record = next(reader.records(buffer))
        assert record.pos == 99
        assert buffer.n_samples == 2

    def test_sites_only(self, sites_only_vcf_file):
        buffer = GenotypeBuffer()
        with VariantReader(sites_only_vcf_file) as reader:
            records = list(reader.records(buffer))
        assert len(records) == 2
        assert all(not r.has_genotypes for r in records)


@pytest.mark.integration
class TestVariantReaderRegion:
    """Region queries through the tabix index."""

    def test_region_limits_records(self, indexed_cohort_vcf_file):
        buffer = GenotypeBuffer()
        with VariantReader(indexed_cohort_vcf_file, region="chr1:150-350") as reader:
            positions = [record.pos for record in reader.records(buffer)]
        assert positions == [199, 299]

    def test_region_without_records(self, indexed_cohort_vcf_file):
        buffer = GenotypeBuffer()
        with VariantReader(indexed_cohort_vcf_file, region="chr1:1000-2000") as reader:
            assert list(reader.records(buffer)) == []

    def test_whole_file_without_region(self, indexed_cohort_vcf_file):
        buffer = GenotypeBuffer()
        with VariantReader(indexed_cohort_vcf_file) as reader:
            assert len(list(reader.records(buffer))) == 5

    def test_region_on_unindexed_file_fails_on_open(self, cohort_vcf_file):
        reader = VariantReader(cohort_vcf_file, region="chr1:1-200")
        with pytest.raises(ValueError, match="requires an indexed file"):
            reader.open()
