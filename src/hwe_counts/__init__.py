"""hwe-counts: per-variant genotype class counts for biallelic VCF/BCF sites."""

__version__ = "0.1.0"
