# src/tsc_files/discovery/setup_files.py
"""Test-runner setup files that test inputs rely on implicitly."""

import re
from collections.abc import Iterable
from pathlib import Path

from tsc_files.constants import (
    SETUP_FILE_NAMES,
    SETUP_SUB_DIRS,
    SETUP_TEST_DIRS,
    TEST_DIR_MARKERS,
    TEST_FRAMEWORK_CONFIGS,
)
from tsc_files.logs import get_app_logger


SETUP_ARRAY_RE = re.compile(r"setupFiles?(?:AfterEnv)?\s*:\s*\[([^\]]*)\]")
QUOTED_RE = re.compile(r"""['"`]([^'"`]+)['"`]""")


def has_test_files(files: Iterable[Path], root: Path) -> bool:
    """True when any file sits below a test directory inside ``root``."""
    markers = set(TEST_DIR_MARKERS)
    for path in files:
        try:
            parts = path.parent.relative_to(root).parts
        except ValueError:
            parts = path.parent.parts
        if markers.intersection(parts):
            return True
    return False


def setup_files_from_framework_config(config_dir: Path) -> list[Path]:
    """Existing files named in ``setupFiles``/``setupFilesAfterEnv`` arrays."""
    logger = get_app_logger()
    found: list[Path] = []
    for name in TEST_FRAMEWORK_CONFIGS:
        config_path = config_dir / name
        if not config_path.is_file():
            continue
        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Could not read %s: %s", config_path, e)
            continue
        for array in SETUP_ARRAY_RE.finditer(content):
            for quoted in QUOTED_RE.finditer(array.group(1)):
                candidate = (config_dir / quoted.group(1)).resolve()
                if candidate.is_file():
                    logger.trace(f"[setup_files] {name} names {candidate}")
                    found.append(candidate)
    return found


def conventional_setup_files(config_dir: Path) -> list[Path]:
    """Conventionally named setup files under the usual test directories."""
    found: list[Path] = []
    for test_dir_name in SETUP_TEST_DIRS:
        test_dir = config_dir / test_dir_name
        if not test_dir.is_dir():
            continue
        search_dirs = [test_dir] + [
            test_dir / sub for sub in SETUP_SUB_DIRS if (test_dir / sub).is_dir()
        ]
        for directory in search_dirs:
            found.extend(
                directory / name
                for name in SETUP_FILE_NAMES
                if (directory / name).is_file()
            )
    return found


def find_setup_files(config_dir: Path) -> list[Path]:
    """All setup-file candidates for a project, de-duplicated and sorted."""
    found = {
        path.resolve()
        for path in (
            *setup_files_from_framework_config(config_dir),
            *conventional_setup_files(config_dir),
        )
    }
    return sorted(found)
