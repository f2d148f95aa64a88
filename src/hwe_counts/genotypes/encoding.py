"""BCF genotype integer encoding.

Each allele of a GT value is stored as ``((allele_index + 1) << 1) | phased``,
so ``0`` (or ``1`` for a phased missing allele) means no call, and the htslib
int32 vector-end marker pads samples that carry fewer alleles than the
record's ploidy.
"""

GT_MISSING = 0
INT32_VECTOR_END = -2147483647


def allele_index(code: int) -> int:
    """Allele index encoded in ``code`` (-1 for a missing allele)."""
    return (code >> 1) - 1


def is_phased(code: int) -> bool:
    return bool(code & 1)


def is_missing(code: int) -> bool:
    """True for ``.`` whether or not the phase bit is set."""
    return code >> 1 == 0


def encode_allele(allele: int, phased: bool = False) -> int:
    """Encode an allele index the way BCF stores it.

    Negative indices encode as missing.
    """
    if allele < 0:
        return GT_MISSING | int(phased)
    return ((allele + 1) << 1) | int(phased)
