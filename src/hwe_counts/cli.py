"""hwe-counts: genotype class counts per biallelic variant."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from . import __version__
from .config import ConfigValidationError, ScanConfig, load_config, validate_config
from .scanner import HWECountsScanner

ABOUT = "Consider only the bi-allelic case. Please use bcftools norm -m-"


def version_callback(value: bool) -> None:
    if value:
        print(__version__)
        raise typer.Exit()


app = typer.Typer(
    name="hwe-counts",
    help="Count hom-ref, het and hom-alt genotypes per biallelic VCF/BCF variant",
)
console = Console(stderr=True)


@app.callback()
def main_callback(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version", callback=version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    pass


def setup_logging(verbose: bool, quiet: bool, default_level: str = "INFO") -> None:
    """Configure logging based on verbosity flags."""
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, default_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger("hwe_counts").setLevel(level)


def _parse_samples(samples: str | None) -> list[str] | None:
    if not samples:
        return None
    return [s.strip() for s in samples.split(",") if s.strip()]


def _build_config(
    config_file: Path | None,
    region: str | None,
    samples: list[str] | None,
    progress: bool | None,
) -> ScanConfig:
    overrides = {"region": region, "samples": samples, "progress": progress}

    if config_file is not None:
        return load_config(config_file, overrides)

    values = {k: v for k, v in overrides.items() if v is not None}
    validate_config(values)
    return ScanConfig(**values)


@app.command()
def counts(
    vcf_path: Path = typer.Argument(..., help="Path to VCF/BCF file (.vcf, .vcf.gz, .bcf)"),
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write table to file instead of stdout")
    ] = None,
    region: Annotated[
        str | None, typer.Option("--region", "-r", help="Restrict to region (indexed input)")
    ] = None,
    samples: Annotated[
        str | None, typer.Option("--samples", "-s", help="Comma-separated sample subset")
    ] = None,
    config_file: Annotated[
        Path | None, typer.Option("--config", "-c", help="TOML configuration file")
    ] = None,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
    progress: Annotated[
        bool | None, typer.Option("--progress/--no-progress", help="Show progress spinner")
    ] = None,
) -> None:
    """Count genotype classes for each biallelic VCF record.

    Writes pos, ref, alt, type, aa, ab, bb and nmiss per record. Records
    that are not diploid are skipped. Split multi-allelic sites first with
    bcftools norm -m-.
    """
    if not vcf_path.exists():
        console.print(f"[red]Error: VCF file not found: {vcf_path}[/red]")
        raise typer.Exit(1)

    setup_logging(verbose, quiet)

    try:
        config = _build_config(config_file, region, _parse_samples(samples), progress)
    except (ConfigValidationError, FileNotFoundError) as e:
        console.print(f"[red]Configuration error: {e}[/red]")
        raise typer.Exit(1) from None

    # flags win over the configured level
    if not (verbose or quiet):
        logging.getLogger("hwe_counts").setLevel(config.log_level)

    scanner = HWECountsScanner(config, console=console)

    try:
        if output is None:
            stats = scanner.scan(vcf_path, sys.stdout)
        else:
            with open(output, "w") as f:
                stats = scanner.scan(vcf_path, f)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if not quiet:
        console.print(
            f"[green]✓[/green] {stats['variants_emitted']:,} variants counted, "
            f"{stats['variants_skipped']:,} skipped ({stats['samples']} samples)"
        )


@app.command()
def about() -> None:
    """Describe what the counts command expects of its input."""
    print(ABOUT)


@app.command()
def doctor() -> None:
    """Check system dependencies.

    Verifies that all required dependencies are installed and
    provides installation instructions for any that are missing.
    """
    from .doctor import DependencyChecker

    console.print("\n[bold]hwe-counts System Check[/bold]")
    console.print("─" * 30)

    checker = DependencyChecker()
    all_passed = True
    for result in checker.check_all():
        if result.passed:
            version_str = f" ({result.version})" if result.version else ""
            console.print(f"[green]✓[/green] {result.name}{version_str}")
        else:
            all_passed = False
            console.print(f"[red]✗[/red] {result.name}")
            if result.message:
                console.print(f"    {result.message}")
            console.print(
                f"    Install: {checker.get_install_instructions(result.name.lower())}"
            )

    if not all_passed:
        raise typer.Exit(1)

    console.print("\n[green]All dependencies satisfied.[/green]")


if __name__ == "__main__":
    app()
