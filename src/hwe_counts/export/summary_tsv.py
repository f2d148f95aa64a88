"""Tab-separated output of per-variant genotype counts.

Columns:
- pos: 1-based position
- ref, alt: REF and first ALT allele
- type: htslib variant type bit flags
- aa, ab, bb: hom-ref, het and hom-alt counts
- nmiss: samples with a missing or unusable call
"""

import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from ..models import VariantSummary

logger = logging.getLogger(__name__)

HEADER_COLUMNS = ["pos", "ref", "alt", "type", "aa", "ab", "bb", "nmiss"]


def format_header() -> str:
    return "\t".join(HEADER_COLUMNS) + "\n"


def format_summary_row(summary: VariantSummary) -> str:
    return "\t".join(summary.to_row()) + "\n"


class SummaryWriter:
    """Write summaries to a text stream, header first.

    The header is written exactly once: before the first row, or on close
    if no row was written.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.rows_written = 0
        self._header_written = False

    def write_header(self) -> None:
        if not self._header_written:
            self.stream.write(format_header())
            self._header_written = True

    def write(self, summary: VariantSummary) -> None:
        self.write_header()
        self.stream.write(format_summary_row(summary))
        self.rows_written += 1

    def close(self) -> None:
        self.write_header()
        self.stream.flush()

    def __enter__(self) -> "SummaryWriter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def write_summaries(summaries: Iterable[VariantSummary], output: Path | None = None) -> int:
    """Write summaries to ``output``, or stdout when None.

    Returns:
        Number of rows written
    """
    if output is None:
        with SummaryWriter(sys.stdout) as writer:
            for summary in summaries:
                writer.write(summary)
        return writer.rows_written

    with open(output, "w") as f, SummaryWriter(f) as writer:
        for summary in summaries:
            writer.write(summary)

    logger.info("Wrote %d rows to %s", writer.rows_written, output)
    return writer.rows_written
