# tests/utils/__init__.py

from .constants import DEFAULT_TEST_LOG_LEVEL
from .project import make_project, write_file, write_tsconfig
from .runner import RecordingRunner


__all__ = [  # noqa: RUF022
    # constants
    "DEFAULT_TEST_LOG_LEVEL",
    # project
    "make_project",
    "write_file",
    "write_tsconfig",
    # runner
    "RecordingRunner",
]
