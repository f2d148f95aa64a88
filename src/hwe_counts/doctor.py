"""System dependency checker for hwe-counts."""

import importlib
import platform
import sys
from dataclasses import dataclass


@dataclass
class CheckResult:
    """Result of a dependency check."""

    name: str
    passed: bool
    version: str | None = None
    message: str | None = None


INSTALL_INSTRUCTIONS = {
    "python": {
        "darwin": "brew install python@3.11",
        "linux": "sudo apt install python3.11 or use pyenv",
        "windows": "Download from https://www.python.org/downloads/",
    },
    "cyvcf2": {
        "darwin": "pip install cyvcf2",
        "linux": "pip install cyvcf2",
        "windows": "cyvcf2 is not supported on Windows; use WSL",
    },
}


class DependencyChecker:
    """Check system dependencies for hwe-counts."""

    def check_python(self) -> CheckResult:
        """Check Python version is 3.11+."""
        version = f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
        passed = sys.version_info >= (3, 11)

        return CheckResult(
            name="Python",
            passed=passed,
            version=version,
            message=None if passed else "Python 3.11+ required",
        )

    def check_cyvcf2(self) -> CheckResult:
        """Check if cyvcf2 is installed."""
        try:
            cyvcf2 = importlib.import_module("cyvcf2")
            version = getattr(cyvcf2, "__version__", "unknown")
            return CheckResult(
                name="cyvcf2",
                passed=True,
                version=version,
            )
        except ImportError:
            return CheckResult(
                name="cyvcf2",
                passed=False,
                message="cyvcf2 not installed. Install with: pip install cyvcf2",
            )

    def check_all(self) -> list[CheckResult]:
        return [
            self.check_python(),
            self.check_cyvcf2(),
        ]

    def get_install_instructions(self, dependency: str, os_platform: str | None = None) -> str:
        """Get installation instructions for a dependency.

        Args:
            dependency: Name of the dependency (e.g., 'cyvcf2', 'python').
            os_platform: Platform name (darwin, linux, windows). Auto-detected if None.
        """
        if os_platform is None:
            os_platform = platform.system().lower()
            if os_platform not in ("darwin", "linux", "windows"):
                os_platform = "linux"

        instructions = INSTALL_INSTRUCTIONS.get(dependency, {})
        return instructions.get(os_platform, f"Please install {dependency}")
