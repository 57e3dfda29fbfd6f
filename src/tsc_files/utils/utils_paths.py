# src/tsc_files/utils/utils_paths.py


import os
from pathlib import Path

from tsc_files.constants import DEPS_DIR_NAME


def shorten_path_for_display(
    path: Path | str,
    *,
    cwd: Path | None = None,
    config_dir: Path | None = None,
) -> str:
    """Shorten an absolute path for display purposes.

    Tries to make the path relative to cwd first, then config_dir, and picks
    the shortest result. If neither works, returns the absolute path as a string.
    """
    path_obj = Path(path).resolve()

    candidates: list[str] = []

    for base in (cwd, config_dir):
        if not base:
            continue
        try:
            candidates.append(str(path_obj.relative_to(Path(base).resolve())))
        except ValueError:
            pass

    if candidates:
        return min(candidates, key=len) or "."

    return str(path_obj)


def to_posix_relpath(path: Path, start: Path) -> str:
    """Relative path from ``start`` to ``path`` with forward slashes.

    Unlike ``Path.relative_to`` this walks up with ``..`` when ``path`` is not
    below ``start``. Falls back to the absolute posix path across drives.
    """
    try:
        rel = os.path.relpath(path, start)
    except ValueError:
        return path.as_posix()
    return Path(rel).as_posix()


def is_in_deps_dir(path: Path) -> bool:
    """True when any component of ``path`` is a ``node_modules`` directory."""
    return DEPS_DIR_NAME in path.parts
