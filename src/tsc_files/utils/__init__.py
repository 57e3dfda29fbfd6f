# src/tsc_files/utils/__init__.py

from .utils_files import atomic_write_text, sha256_file
from .utils_matching import (
    expand_braces,
    has_glob_chars,
    is_excluded_raw,
    match_path_glob,
    normalize_pattern,
)
from .utils_paths import is_in_deps_dir, shorten_path_for_display, to_posix_relpath


__all__ = [  # noqa: RUF022
    # utils_files
    "atomic_write_text",
    "sha256_file",
    # utils_matching
    "expand_braces",
    "has_glob_chars",
    "is_excluded_raw",
    "match_path_glob",
    "normalize_pattern",
    # utils_paths
    "is_in_deps_dir",
    "shorten_path_for_display",
    "to_posix_relpath",
]
