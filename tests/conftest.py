"""Pytest configuration and fixtures for hwe-counts tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))

from fixtures.vcf_generator import (  # noqa: E402
    COHORT_SAMPLES,
    SyntheticVariant,
    VCFGenerator,
    make_cohort_vcf_file,
    make_haploid_vcf_file,
    make_indexed_cohort_vcf_file,
    make_sites_only_vcf_file,
)


@pytest.fixture
def vcf_generator():
    """Provide VCFGenerator class for tests."""
    return VCFGenerator


@pytest.fixture
def synthetic_variant_factory():
    """Factory for creating SyntheticVariant instances."""

    def _factory(**kwargs):
        defaults = {
            "chrom": "chr1",
            "pos": 100,
            "ref": "A",
            "alt": ["G"],
        }
        defaults.update(kwargs)
        return SyntheticVariant(**defaults)

    return _factory


@pytest.fixture
def cohort_samples() -> list[str]:
    return list(COHORT_SAMPLES)


@pytest.fixture
def cohort_vcf_file():
    """Generate the four-sample cohort VCF."""
    path = make_cohort_vcf_file()
    yield path
    if path.exists():
        path.unlink()


@pytest.fixture
def indexed_cohort_vcf_file():
    """Generate the cohort VCF as .vcf.gz with a .tbi index."""
    path = make_indexed_cohort_vcf_file()
    yield path
    for p in (path, Path(f"{path}.tbi")):
        if p.exists():
            p.unlink()


@pytest.fixture
def sites_only_vcf_file():
    path = make_sites_only_vcf_file()
    yield path
    if path.exists():
        path.unlink()


@pytest.fixture
def haploid_vcf_file():
    path = make_haploid_vcf_file()
    yield path
    if path.exists():
        path.unlink()
