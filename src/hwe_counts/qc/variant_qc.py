"""Per-variant genotype class counts for biallelic sites.

Counts hom-ref (aa), het (ab) and hom-alt (bb) calls plus the number of
samples whose call is missing or unusable. Only diploid records are
analysed; split multi-allelic sites first (``bcftools norm -m-``).
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..genotypes.buffer import GenotypeBuffer
from ..genotypes.decoder import Unusable, decode_genotype
from ..models import VariantRecord, VariantSummary

logger = logging.getLogger(__name__)

DIPLOID = 2


@dataclass
class GenotypeCounts:
    hom_ref: int = 0
    het: int = 0
    hom_alt: int = 0
    n_missing: int = 0

    @property
    def total(self) -> int:
        return self.hom_ref + self.het + self.hom_alt + self.n_missing


def compute_genotype_counts(codes: Sequence[int], n_samples: int) -> GenotypeCounts:
    """Count genotype classes over a diploid code matrix.

    Args:
        codes: Encoded GT values, two per sample, sample-major
        n_samples: Number of samples to read from ``codes``

    Returns:
        GenotypeCounts whose total equals ``n_samples``
    """
    counts = GenotypeCounts()

    for i in range(n_samples):
        gt = decode_genotype(codes[i * DIPLOID], codes[i * DIPLOID + 1])
        if isinstance(gt, Unusable):
            counts.n_missing += 1
            continue

        alt_count = gt.alt_count
        if alt_count == 0:
            counts.hom_ref += 1
        elif alt_count == 1:
            counts.het += 1
        else:
            counts.hom_alt += 1

    return counts


def classify_variant(record: VariantRecord, buffer: GenotypeBuffer) -> VariantSummary | None:
    """Summarise the genotypes of one record.

    Args:
        record: The variant; ``pos`` is 0-based
        buffer: Genotype matrix for ``record``, filled by the reader

    Returns:
        VariantSummary with a 1-based position, or None when the record is
        not analysed (no GT field, ploidy other than 2, or no ALT allele)
    """
    if not record.has_genotypes:
        logger.debug("Skipping %s:%d: no genotypes", record.chrom, record.pos + 1)
        return None

    if buffer.ploidy != DIPLOID:
        logger.debug(
            "Skipping %s:%d: ploidy %d", record.chrom, record.pos + 1, buffer.ploidy
        )
        return None

    if len(record.alleles) < 2:
        logger.debug("Skipping %s:%d: no ALT allele", record.chrom, record.pos + 1)
        return None

    counts = compute_genotype_counts(buffer.codes, buffer.n_samples)

    return VariantSummary(
        position=record.pos + 1,
        ref=record.alleles[0],
        alt=record.alleles[1],
        variant_type=record.variant_type,
        hom_ref=counts.hom_ref,
        het=counts.het,
        hom_alt=counts.hom_alt,
        n_missing=counts.n_missing,
        chrom=record.chrom,
    )
