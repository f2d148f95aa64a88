"""Decode one sample's diploid GT pair into a biallelic call."""

from dataclasses import dataclass
from enum import Enum

from .encoding import INT32_VECTOR_END, allele_index, is_missing, is_phased


class UnusableReason(Enum):
    MISSING = "missing"
    VECTOR_END = "vector_end"
    NON_BIALLELIC = "non_biallelic"


@dataclass(frozen=True)
class DecodedGenotype:
    """A usable call with both alleles in {0, 1}."""

    allele_a: int
    allele_b: int
    phased: bool = False

    @property
    def alt_count(self) -> int:
        return self.allele_a + self.allele_b


@dataclass(frozen=True)
class Unusable:
    """A sample call that cannot be classified; counted as missing."""

    reason: UnusableReason


def decode_genotype(code0: int, code1: int) -> DecodedGenotype | Unusable:
    """Decode the two GT codes of a diploid sample.

    Phase is read from the second code only, as BCF stores it. Only the
    second code is checked for vector-end: a vector-end first code is not a
    recognised sentinel and is rejected by the allele range check instead.

    Args:
        code0: Encoded first allele
        code1: Encoded second allele

    Returns:
        DecodedGenotype, or Unusable when either allele is missing, the
        sample is haploid, or an allele index is outside {0, 1}
    """
    if is_missing(code0):
        return Unusable(UnusableReason.MISSING)
    if is_missing(code1):
        return Unusable(UnusableReason.MISSING)
    if code1 == INT32_VECTOR_END:
        return Unusable(UnusableReason.VECTOR_END)

    phased = is_phased(code1)
    allele_a = allele_index(code0)
    allele_b = allele_index(code1)

    # biallelic only: alleles 2+ discard this sample's call
    if not 0 <= allele_a <= 1 or not 0 <= allele_b <= 1:
        return Unusable(UnusableReason.NON_BIALLELIC)

    return DecodedGenotype(allele_a=allele_a, allele_b=allele_b, phased=phased)
