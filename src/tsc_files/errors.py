# src/tsc_files/errors.py
"""Error taxonomy and exit-code mapping.

Configuration-class errors mean the user must fix or point at a config;
system-class errors mean the environment (filesystem, permissions) failed.
Every error carries a ``code`` so the CLI can return it directly.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .meta import PROGRAM_CONFIG


ErrorCategory = Literal["config", "system", "type", "unknown"]

EXIT_CODES: dict[ErrorCategory | Literal["success"], int] = {
    "success": 0,
    "type": 1,
    "config": 2,
    "system": 3,
    "unknown": 99,
}

OVERRIDE_HINT = "Use --project to specify the config file explicitly."


class TscFilesError(Exception):
    """Base class for errors raised by this package."""

    category: ErrorCategory = "unknown"

    @property
    def code(self) -> int:
        return EXIT_CODES[self.category]


class ConfigError(TscFilesError):
    """A configuration problem the user can fix."""

    category: ErrorCategory = "config"

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.path = path
        super().__init__(message)


class ConfigNotFoundError(ConfigError):
    """No configuration file could be found for a directory or override."""

    def __init__(self, start: Path, *, explicit: bool = False) -> None:
        if explicit:
            msg = f"TypeScript config not found: {start}"
        else:
            msg = (
                f"No {PROGRAM_CONFIG} found in {start} or any parent directory. "
                f"{OVERRIDE_HINT}"
            )
        super().__init__(msg, start)


class ConfigParseError(ConfigError):
    """A config file exists but is not valid JSONC (or not an object)."""

    def __init__(self, path: Path, detail: str) -> None:
        msg = f"Failed to parse {path}: {detail}. {OVERRIDE_HINT}"
        super().__init__(msg, path)


class ConfigExtendsError(ConfigError):
    """An ``extends`` reference cannot be resolved or forms a cycle."""

    def __init__(self, path: Path, detail: str) -> None:
        msg = f"Invalid 'extends' in {path}: {detail}. {OVERRIDE_HINT}"
        super().__init__(msg, path)


class CacheWriteError(TscFilesError):
    """Writing a synthesized config (or its directory) failed."""

    category: ErrorCategory = "system"

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        super().__init__(f"Failed to write {path}: {cause}")


class CheckCancelledError(TscFilesError):
    """Raised when a deadline passes or the caller cancels a run."""

    category: ErrorCategory = "system"


@dataclass(frozen=True)
class DiscoveryLimitExceeded:
    """Soft notice: discovery stopped early and returned a partial set."""

    kind: Literal["files", "depth"]
    limit: int
    files_reached: int
    depth_reached: int
    config_path: Path

    @property
    def message(self) -> str:
        if self.kind == "files":
            return (
                f"Dependency discovery for {self.config_path} stopped at "
                f"{self.files_reached} files (maxFiles={self.limit}, depth "
                f"{self.depth_reached}); raise --max-files to include more."
            )
        return (
            f"Dependency discovery for {self.config_path} reached depth "
            f"{self.depth_reached} (maxDepth={self.limit}) with "
            f"{self.files_reached} files; raise --max-depth to follow "
            "deeper imports."
        )

    def __str__(self) -> str:
        return self.message


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Map an exception to a user-facing error category."""
    if isinstance(exc, TscFilesError):
        return exc.category
    if isinstance(exc, OSError):
        return "system"
    # bad option values (e.g. a non-integer limit in the environment)
    if isinstance(exc, ValueError):
        return "config"
    return "unknown"


def exit_code_for(exc: BaseException) -> int:
    return EXIT_CODES[categorize_error(exc)]
