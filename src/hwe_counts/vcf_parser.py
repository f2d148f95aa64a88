"""VCF/BCF reading: variant typing and GT matrix encoding via cyvcf2."""

import logging
from collections.abc import Iterable, Iterator, Sequence
from itertools import chain
from pathlib import Path

from cyvcf2 import VCF

from .genotypes.buffer import GenotypeBuffer
from .genotypes.encoding import INT32_VECTOR_END, encode_allele
from .models import VariantRecord, VariantType

logger = logging.getLogger(__name__)

# cyvcf2 reports missing alleles as -1 and vector-end padding as -2
CYVCF2_MISSING = -1
CYVCF2_VECTOR_END = -2

GVCF_REF_ALTS = {"<*>", "<X>", "<NON_REF>"}


def _allele_type(ref: str, alt: str) -> VariantType:
    """Classify a single REF/ALT pair."""
    if alt == "*":
        return VariantType.OVERLAP
    if alt.startswith("<"):
        if alt.upper() in GVCF_REF_ALTS:
            return VariantType.REF
        return VariantType.OTHER
    if "[" in alt or "]" in alt or alt.startswith(".") or alt.endswith("."):
        return VariantType.BND if alt != "." else VariantType.REF

    if len(ref) != len(alt):
        return VariantType.INDEL

    mismatches = sum(1 for r, a in zip(ref.upper(), alt.upper(), strict=True) if r != a)
    if mismatches == 0:
        return VariantType.REF
    if mismatches == 1:
        return VariantType.SNP
    return VariantType.MNP


def classify_variant_type(ref: str, alts: Sequence[str | None]) -> VariantType:
    """Classify a record by OR-ing the types of each ALT allele."""
    variant_type = VariantType.REF
    for alt in alts:
        if alt is None:
            continue
        variant_type |= _allele_type(ref, alt)
    return variant_type


def encode_sample_genotype(gt: Sequence, ploidy: int) -> list[int]:
    """Encode one cyvcf2 genotype entry into ``ploidy`` BCF codes.

    Args:
        gt: cyvcf2 entry ``[allele, ..., phased]`` (alleles -1 for missing)
        ploidy: Width of the record's genotype matrix

    Returns:
        List of encoded codes, padded with vector-end when the sample
        carries fewer alleles than ``ploidy``
    """
    alleles = list(gt[:-1])
    phased = bool(gt[-1]) if gt else False
    codes = []

    for j in range(ploidy):
        if j >= len(alleles) or alleles[j] == CYVCF2_VECTOR_END:
            codes.append(INT32_VECTOR_END)
            continue
        # BCF keeps the phase bit on every allele after the first
        codes.append(encode_allele(int(alleles[j]), phased and j > 0))

    return codes


def fill_genotype_buffer(genotypes: Sequence[Sequence] | None, buffer: GenotypeBuffer) -> None:
    """Encode a cyvcf2 genotype list into ``buffer``.

    The matrix ploidy is the largest allele count of any sample, 0 when
    there are no genotypes.
    """
    if not genotypes:
        buffer.reset(0, 0)
        return

    ploidy = max(len(gt) - 1 for gt in genotypes)
    buffer.reset(len(genotypes), ploidy)

    for i, gt in enumerate(genotypes):
        start = i * ploidy
        buffer.codes[start : start + ploidy] = encode_sample_genotype(gt, ploidy)


class VariantReader:
    """Stream records from a VCF/BCF, filling a caller-owned genotype buffer."""

    def __init__(
        self,
        vcf_path: Path | str,
        samples: list[str] | None = None,
        region: str | None = None,
    ):
        self.vcf_path = Path(vcf_path)
        self.sample_subset = samples
        self.region = region
        self._vcf: VCF | None = None
        self._variants: Iterable | None = None

    def open(self) -> None:
        """Open the file and, when a region is set, its index query.

        Raises:
            ValueError: If a region is requested on a file without an index.
        """
        if self.sample_subset:
            self._vcf = VCF(str(self.vcf_path), samples=self.sample_subset)
        else:
            self._vcf = VCF(str(self.vcf_path))

        self._variants = self._query_region() if self.region else self._vcf

    def _query_region(self) -> Iterator:
        # cyvcf2 loads the index lazily, on the first record of the query
        try:
            query = self._vcf(self.region)
            first = next(query, None)
        except AssertionError as e:
            self.close()
            raise ValueError(f"region query requires an indexed file: {self.vcf_path}") from e

        if first is None:
            return iter(())
        return chain([first], query)

    def close(self) -> None:
        if self._vcf is not None:
            self._vcf.close()
            self._vcf = None
            self._variants = None

    def __enter__(self) -> "VariantReader":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def samples(self) -> list[str]:
        if self._vcf is None:
            self.open()
        return list(self._vcf.samples)

    def records(self, buffer: GenotypeBuffer) -> Iterator[VariantRecord]:
        """Yield records in file order.

        ``buffer`` holds the genotype matrix of the most recently yielded
        record and is overwritten on the next iteration.
        """
        if self._vcf is None:
            self.open()

        n_samples = len(self._vcf.samples)

        for variant in self._variants:
            yield self._to_record(variant, n_samples, buffer)

    def _to_record(self, variant, n_samples: int, buffer: GenotypeBuffer) -> VariantRecord:
        alts = [alt for alt in variant.ALT if alt is not None]
        has_gt = n_samples > 0 and "GT" in (variant.FORMAT or [])

        fill_genotype_buffer(variant.genotypes if has_gt else None, buffer)

        return VariantRecord(
            chrom=variant.CHROM,
            pos=variant.start,
            alleles=[variant.REF, *alts],
            variant_type=classify_variant_type(variant.REF, alts),
            has_genotypes=has_gt,
        )
