"""Streaming genotype count scan over a VCF/BCF."""

import logging
from pathlib import Path
from typing import Any, TextIO

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from .config import ScanConfig
from .export.summary_tsv import SummaryWriter
from .genotypes.buffer import GenotypeBuffer
from .qc.variant_qc import DIPLOID, classify_variant
from .vcf_parser import VariantReader

logger = logging.getLogger(__name__)


class HWECountsScanner:
    """Classify every record of a VCF/BCF and write one row per analysed variant.

    Rows are written in input order. Records that are not analysed
    (non-diploid, no GT, no ALT) produce no row and are counted as skipped.
    """

    def __init__(self, config: ScanConfig | None = None, console: Console | None = None):
        self.config = config or ScanConfig()
        self.console = console or Console(stderr=True)
        self.buffer = GenotypeBuffer(self.config.initial_buffer_samples * DIPLOID)

    def scan(self, vcf_path: Path | str, output: TextIO) -> dict[str, Any]:
        """Scan ``vcf_path`` and write the count table to ``output``.

        Returns:
            Statistics about the scan
        """
        vcf_path = Path(vcf_path)
        stats = {
            "variants_seen": 0,
            "variants_emitted": 0,
            "variants_skipped": 0,
            "samples": 0,
        }

        with VariantReader(
            vcf_path, samples=self.config.samples, region=self.config.region
        ) as reader, SummaryWriter(output) as writer:
            stats["samples"] = len(reader.samples)
            logger.info("Scanning %s (%d samples)", vcf_path, stats["samples"])

            if self.config.progress:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=self.console,
                    transient=True,
                ) as progress:
                    task = progress.add_task("Counting genotypes...", total=None)
                    for _ in self._process(reader, writer, stats):
                        progress.update(
                            task,
                            description=f"Counting genotypes... {stats['variants_seen']:,} records",
                        )
            else:
                for _ in self._process(reader, writer, stats):
                    pass

        logger.info(
            "Processed %d records: %d emitted, %d skipped",
            stats["variants_seen"],
            stats["variants_emitted"],
            stats["variants_skipped"],
        )
        return stats

    def _process(self, reader: VariantReader, writer: SummaryWriter, stats: dict[str, Any]):
        for record in reader.records(self.buffer):
            stats["variants_seen"] += 1
            summary = classify_variant(record, self.buffer)
            if summary is None:
                stats["variants_skipped"] += 1
            else:
                writer.write(summary)
                stats["variants_emitted"] += 1
            yield record
