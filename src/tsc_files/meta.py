# src/tsc_files/meta.py
"""Program identity shared by the CLI, logger, and cache layout."""

from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version


# --- program identity ---
PROGRAM_PACKAGE = "tsc_files"
PROGRAM_SCRIPT = "tsc-files"
PROGRAM_DISPLAY = "tsc-files"
PROGRAM_ENV = "TSC_FILES"
# name of the per-project compiler configuration we look for
PROGRAM_CONFIG = "tsconfig.json"


@dataclass(frozen=True)
class Metadata:
    """Version information for this tool."""

    version: str
    distribution: str = PROGRAM_SCRIPT

    def __str__(self) -> str:
        return f"{self.distribution} {self.version}"


def get_metadata() -> Metadata:
    """Return installed distribution metadata, or 'unknown' from a source tree."""
    try:
        return Metadata(version(PROGRAM_SCRIPT))
    except PackageNotFoundError:
        return Metadata("unknown")
