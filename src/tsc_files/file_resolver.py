# src/tsc_files/file_resolver.py
"""Turn command-line file arguments into concrete source files."""

import os
from collections.abc import Iterable
from pathlib import Path

from .constants import DECLARATION_SUFFIXES, INPUT_IGNORE_DIRS
from .discovery import is_checkable
from .logs import get_app_logger
from .utils import expand_braces, has_glob_chars, match_path_glob


def _is_input_candidate(path: Path, *, allow_js: bool) -> bool:
    if path.name.endswith(DECLARATION_SUFFIXES):
        return False
    return is_checkable(path, allow_js=allow_js)


def _walk_files(start: Path) -> Iterable[Path]:
    """Files under ``start`` in sorted order, skipping ignored directories."""
    for dirpath, dirnames, filenames in os.walk(start):
        dirnames[:] = sorted(d for d in dirnames if d not in INPUT_IGNORE_DIRS)
        for name in sorted(filenames):
            yield Path(dirpath) / name


def _static_root(pattern: str) -> str:
    parts = pattern.split("/")
    static: list[str] = []
    for part in parts[:-1]:
        if has_glob_chars(part):
            break
        static.append(part)
    return "/".join(static)


def expand_glob(pattern: str, cwd: Path, *, allow_js: bool) -> list[Path]:
    """Source files matching ``pattern`` (relative to ``cwd`` or absolute)."""
    results: list[Path] = []
    for alternative in expand_braces(pattern.replace("\\", "/")):
        if Path(alternative).is_absolute():
            root = Path(Path(alternative).anchor)
            alternative = Path(alternative).relative_to(root).as_posix()  # noqa: PLW2901
        else:
            root = cwd
        while alternative.startswith("./"):
            alternative = alternative[2:]  # noqa: PLW2901

        start = root / _static_root(alternative)
        if not start.is_dir():
            continue
        for path in _walk_files(start):
            rel = path.relative_to(root).as_posix()
            if match_path_glob(rel, alternative) and _is_input_candidate(
                path, allow_js=allow_js
            ):
                results.append(path.resolve())
    return sorted(set(results))


def resolve_input_files(
    patterns: Iterable[str],
    cwd: Path,
    *,
    allow_js: bool = False,
) -> list[Path]:
    """Expand files, directories and globs into absolute source paths.

    Directories expand to every TypeScript (and, with ``allow_js``,
    JavaScript) file below them. ``node_modules``, ``dist`` and ``.d.ts``
    files are never inputs. Order follows the arguments, duplicates dropped.
    """
    logger = get_app_logger()
    resolved: list[Path] = []
    seen: set[Path] = set()

    def _add(path: Path) -> None:
        if path not in seen:
            seen.add(path)
            resolved.append(path)

    for pattern in patterns:
        if has_glob_chars(pattern):
            matches = expand_glob(pattern, cwd, allow_js=allow_js)
            if not matches:
                logger.warning("No files match pattern: %s", pattern)
            for path in matches:
                _add(path)
            continue

        path = (cwd / pattern).resolve()
        if path.is_dir():
            for child in _walk_files(path):
                if _is_input_candidate(child, allow_js=allow_js):
                    _add(child.resolve())
        elif path.is_file():
            if _is_input_candidate(path, allow_js=allow_js):
                _add(path)
            else:
                logger.warning("Skipping unsupported file: %s", pattern)
        else:
            logger.warning("File not found: %s", pattern)

    logger.debug("Resolved %d input file(s)", len(resolved))
    return resolved
