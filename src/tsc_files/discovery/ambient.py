# src/tsc_files/discovery/ambient.py
"""Ambient and generated declaration files picked up by ``include`` globs."""

import os
from pathlib import Path

from tsc_files.config import EffectiveConfig
from tsc_files.constants import AMBIENT_SUFFIXES, DEPS_DIR_NAME, GENERATED_SUFFIX
from tsc_files.logs import get_app_logger
from tsc_files.utils import (
    has_glob_chars,
    is_excluded_raw,
    match_path_glob,
    normalize_pattern,
)


# Declaration outputs a source-file glob can stand for
_SOURCE_TO_AMBIENT: dict[str, tuple[str, ...]] = {
    ".tsx": (".d.ts", GENERATED_SUFFIX),
    ".ts": (".d.ts", GENERATED_SUFFIX),
    ".mts": (".d.mts",),
    ".cts": (".d.cts",),
}


def declaration_patterns(include: list[str]) -> list[str]:
    """Rewrite include globs so they only match declaration and .gen.ts files.

    ``src`` (a directory) becomes ``src/**/*.d.ts`` (plus ``.d.mts``,
    ``.d.cts`` and ``.gen.ts``); ``**/*`` gains every declaration suffix;
    ``src/*.mts`` becomes ``src/*.d.mts``; JS-only patterns drop out.
    """
    result: list[str] = []

    def _add(pattern: str) -> None:
        if pattern not in result:
            result.append(pattern)

    for pattern in include:
        pat = pattern.rstrip("/")
        if pat.endswith(AMBIENT_SUFFIXES):
            _add(pat)
            continue

        source_suffix = next((s for s in _SOURCE_TO_AMBIENT if pat.endswith(s)), None)
        if source_suffix is not None:
            stem = pat[: -len(source_suffix)]
            for suffix in _SOURCE_TO_AMBIENT[source_suffix]:
                _add(stem + suffix)
            continue

        last = pat.rsplit("/", 1)[-1]
        if last.endswith("*") or (not has_glob_chars(last) and "." not in last):
            if not has_glob_chars(last):
                # A plain directory name
                pat = f"{pat}/**/*"
            for suffix in AMBIENT_SUFFIXES:
                _add(pat + suffix)

    return result


def _static_prefix(pattern: str) -> str:
    """Leading path segments of ``pattern`` that contain no glob characters."""
    parts = pattern.split("/")
    static: list[str] = []
    for part in parts[:-1]:
        if has_glob_chars(part):
            break
        static.append(part)
    return "/".join(static)


def find_declaration_files(config: EffectiveConfig) -> list[Path]:
    """Sorted declaration and ``.gen.ts`` files matched by the config's include.

    Walks from each pattern's static prefix, pruning excluded directories
    and anything under ``node_modules``. Directory enumeration errors
    propagate.
    """
    logger = get_app_logger()
    root = config.files_root
    excludes = config.exclude_patterns

    patterns: list[str] = []
    for raw in declaration_patterns(config.include_patterns):
        pat = normalize_pattern(raw, root)
        if pat is None:
            logger.debug("Ignoring include pattern outside %s: %s", root, raw)
            continue
        patterns.append(os.path.normpath(pat).replace(os.sep, "/"))

    found: set[Path] = set()
    for start in sorted({_static_prefix(p) for p in patterns}):
        start_dir = (root / start) if start else root
        if not start_dir.is_dir():
            continue
        for dirpath, dirnames, filenames in os.walk(start_dir, onerror=_raise):
            current = Path(dirpath)
            dirnames[:] = sorted(
                d
                for d in dirnames
                if d != DEPS_DIR_NAME
                and not is_excluded_raw(current / d, excludes, root)
            )
            for name in filenames:
                if not name.endswith(AMBIENT_SUFFIXES):
                    continue
                path = current / name
                rel = os.path.relpath(path, root).replace(os.sep, "/")
                if not any(match_path_glob(rel, p) for p in patterns):
                    continue
                if is_excluded_raw(path, excludes, root):
                    continue
                found.add(path)

    result = sorted(found)
    logger.trace(f"[find_declaration_files] {len(result)} file(s) under {root}")
    return result


def _raise(error: OSError) -> None:
    raise error
