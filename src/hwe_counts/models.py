"""Data models for per-variant genotype counting."""

from dataclasses import dataclass, field
from enum import IntFlag


class VariantType(IntFlag):
    """Variant type bit flags, numbered as htslib's bcf_get_variant_types."""

    REF = 0
    SNP = 1
    MNP = 2
    INDEL = 4
    OTHER = 8
    BND = 16
    OVERLAP = 32


@dataclass
class VariantRecord:
    """One VCF record as handed to the classifier.

    ``pos`` is 0-based; ``alleles[0]`` is REF. The genotype matrix itself
    travels separately, in a GenotypeBuffer.
    """

    chrom: str
    pos: int
    alleles: list[str]
    variant_type: VariantType = VariantType.REF
    has_genotypes: bool = True


@dataclass
class VariantSummary:
    """Genotype class counts for one biallelic variant."""

    position: int
    ref: str
    alt: str
    variant_type: VariantType
    hom_ref: int = 0
    het: int = 0
    hom_alt: int = 0
    n_missing: int = 0
    chrom: str | None = field(default=None, compare=False)

    @property
    def n_samples(self) -> int:
        return self.hom_ref + self.het + self.hom_alt + self.n_missing

    @property
    def n_called(self) -> int:
        return self.hom_ref + self.het + self.hom_alt

    def to_row(self) -> list[str]:
        """Column values in output order (pos, ref, alt, type, aa, ab, bb, nmiss)."""
        return [
            str(self.position),
            self.ref,
            self.alt,
            str(int(self.variant_type)),
            str(self.hom_ref),
            str(self.het),
            str(self.hom_alt),
            str(self.n_missing),
        ]
