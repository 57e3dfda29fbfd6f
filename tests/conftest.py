# tests/conftest.py
"""Shared test setup for project."""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

import tsc_files.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset logger level to DEFAULT_TEST_LOG_LEVEL before and after each test.

    The app logger is a module-level singleton; CLI tests change its level.
    """
    logger = mod_logs.get_app_logger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's TSC_FILES_* settings out of tests."""
    for key in (
        "TSC_FILES_MAX_DEPTH",
        "TSC_FILES_MAX_FILES",
        "TSC_FILES_CACHE_DIR",
        "TSC_FILES_NO_CACHE",
        "TSC_FILES_LOG_LEVEL",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def isolate_temp_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Point the system temp directory inside tmp_path.

    Projects without node_modules keep their synthesized configs there.
    """
    monkeypatch.setattr(tempfile, "tempdir", str(tmp_path / "system-tmp"))
