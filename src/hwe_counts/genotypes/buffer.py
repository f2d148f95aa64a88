"""Reusable per-variant genotype code buffer."""

from .encoding import GT_MISSING


class GenotypeBuffer:
    """Caller-owned buffer of encoded GT values, reused across variants.

    Capacity only grows; a variant never shrinks it. ``ploidy`` and
    ``n_samples`` describe the matrix currently held, stored sample-major
    (``codes[i * ploidy + j]``).
    """

    def __init__(self, initial_capacity: int = 0):
        self.codes: list[int] = [GT_MISSING] * initial_capacity
        self.n_samples = 0
        self.ploidy = 0

    @property
    def capacity(self) -> int:
        return len(self.codes)

    def reserve(self, size: int) -> None:
        """Grow the buffer to hold at least ``size`` codes."""
        if size > len(self.codes):
            self.codes.extend([GT_MISSING] * (size - len(self.codes)))

    def reset(self, n_samples: int, ploidy: int) -> None:
        """Prepare the buffer for a new matrix of ``n_samples`` x ``ploidy``."""
        self.reserve(n_samples * ploidy)
        self.n_samples = n_samples
        self.ploidy = ploidy
