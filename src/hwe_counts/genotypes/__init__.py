"""Genotype encoding, decoding and buffering."""

from .buffer import GenotypeBuffer
from .decoder import DecodedGenotype, Unusable, UnusableReason, decode_genotype
from .encoding import (
    GT_MISSING,
    INT32_VECTOR_END,
    allele_index,
    encode_allele,
    is_missing,
    is_phased,
)

__all__ = [
    "GT_MISSING",
    "INT32_VECTOR_END",
    "allele_index",
    "encode_allele",
    "is_missing",
    "is_phased",
    "DecodedGenotype",
    "Unusable",
    "UnusableReason",
    "decode_genotype",
    "GenotypeBuffer",
]
