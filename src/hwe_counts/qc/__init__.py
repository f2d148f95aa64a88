"""Genotype class counting for biallelic variants."""

from .variant_qc import GenotypeCounts, classify_variant, compute_genotype_counts

__all__ = [
    "GenotypeCounts",
    "classify_variant",
    "compute_genotype_counts",
]
