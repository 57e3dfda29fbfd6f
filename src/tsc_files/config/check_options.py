# src/tsc_files/config/check_options.py


import argparse
import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path

from tsc_files.constants import (
    DEFAULT_ENV_CACHE_DIR,
    DEFAULT_ENV_MAX_DEPTH,
    DEFAULT_ENV_MAX_FILES,
    DEFAULT_ENV_NO_CACHE,
    DEFAULT_JOBS,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MAX_FILES,
    DEFAULT_NO_EMIT,
    DEFAULT_RECURSIVE,
    DEFAULT_SKIP_LIB_CHECK,
    DEFAULT_USE_CACHE,
)
from tsc_files.logs import get_app_logger
from tsc_files.meta import PROGRAM_ENV


_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class CheckOptions:
    project: Path | None = None
    max_depth: int = DEFAULT_MAX_DEPTH
    max_files: int = DEFAULT_MAX_FILES
    recursive: bool = DEFAULT_RECURSIVE
    cache: bool = DEFAULT_USE_CACHE
    cache_dir: Path | None = None
    skip_lib_check: bool = DEFAULT_SKIP_LIB_CHECK
    no_emit: bool = DEFAULT_NO_EMIT
    include: tuple[str, ...] = ()
    cwd: Path = field(default_factory=Path.cwd)
    jobs: int = DEFAULT_JOBS
    deadline: float | None = None

    def __post_init__(self) -> None:
        for name in ("max_depth", "max_files", "jobs"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                xmsg = f"{name} must be an integer, got {value!r}"
                raise TypeError(xmsg)
        if self.max_depth < 0:
            xmsg = f"max_depth must be >= 0, got {self.max_depth}"
            raise ValueError(xmsg)
        if self.max_files < 1:
            xmsg = f"max_files must be >= 1, got {self.max_files}"
            raise ValueError(xmsg)
        if self.jobs < 1:
            xmsg = f"jobs must be >= 1, got {self.jobs}"
            raise ValueError(xmsg)
        if self.deadline is not None and self.deadline <= 0:
            xmsg = f"deadline must be positive, got {self.deadline}"
            raise ValueError(xmsg)


def split_include(values: Iterable[str] | str | None) -> tuple[str, ...]:
    """Flatten include values, splitting comma-separated entries."""
    if values is None:
        return ()
    if isinstance(values, str):
        values = [values]
    result: list[str] = []
    for value in values:
        for part in value.split(","):
            part = part.strip()  # noqa: PLW2901
            if part and part not in result:
                result.append(part)
    return tuple(result)


def _parse_int(raw: str, source: str) -> int:
    try:
        return int(raw.strip())
    except ValueError as e:
        xmsg = f"{source} must be an integer, got {raw!r}"
        raise ValueError(xmsg) from e


def _env(env: Mapping[str, str], key: str) -> str | None:
    value = env.get(f"{PROGRAM_ENV}_{key}")
    if value is None or not value.strip():
        return None
    return value


def resolve_check_options(
    args: argparse.Namespace,
    env: Mapping[str, str] | None = None,
) -> CheckOptions:
    """Build ``CheckOptions`` from CLI args, then environment, then defaults.

    Raises:
        ValueError: an integer limit (from either source) is not valid.
    """
    logger = get_app_logger()
    if env is None:
        env = os.environ

    cwd = Path(getattr(args, "cwd", None) or Path.cwd()).resolve()

    def _int_option(attr: str, env_key: str, default: int) -> int:
        value = getattr(args, attr, None)
        if value is not None:
            return int(value)
        raw = _env(env, env_key)
        if raw is not None:
            logger.trace(f"[resolve_check_options] {attr} from environment")
            return _parse_int(raw, f"{PROGRAM_ENV}_{env_key}")
        return default

    max_depth = _int_option("max_depth", DEFAULT_ENV_MAX_DEPTH, DEFAULT_MAX_DEPTH)
    max_files = _int_option("max_files", DEFAULT_ENV_MAX_FILES, DEFAULT_MAX_FILES)

    cache = getattr(args, "cache", None)
    if cache is None:
        raw_no_cache = _env(env, DEFAULT_ENV_NO_CACHE)
        cache = (
            raw_no_cache.strip().lower() not in _TRUTHY
            if raw_no_cache is not None
            else DEFAULT_USE_CACHE
        )

    cache_dir_raw = getattr(args, "cache_dir", None) or _env(env, DEFAULT_ENV_CACHE_DIR)
    cache_dir = (cwd / cache_dir_raw).resolve() if cache_dir_raw else None

    project_raw = getattr(args, "project", None)
    project = (cwd / project_raw).resolve() if project_raw else None

    def _flag(attr: str, default: bool) -> bool:  # noqa: FBT001
        value = getattr(args, attr, None)
        return default if value is None else bool(value)

    return CheckOptions(
        project=project,
        max_depth=max_depth,
        max_files=max_files,
        recursive=_flag("recursive", DEFAULT_RECURSIVE),
        cache=bool(cache),
        cache_dir=cache_dir,
        skip_lib_check=_flag("skip_lib_check", DEFAULT_SKIP_LIB_CHECK),
        no_emit=_flag("no_emit", DEFAULT_NO_EMIT),
        include=split_include(getattr(args, "include", None)),
        cwd=cwd,
        jobs=int(getattr(args, "jobs", None) or DEFAULT_JOBS),
        deadline=getattr(args, "deadline", None),
    )
