"""Export module for genotype count tables."""

from .summary_tsv import (
    HEADER_COLUMNS,
    SummaryWriter,
    format_header,
    format_summary_row,
    write_summaries,
)

__all__ = [
    "HEADER_COLUMNS",
    "SummaryWriter",
    "format_header",
    "format_summary_row",
    "write_summaries",
]
