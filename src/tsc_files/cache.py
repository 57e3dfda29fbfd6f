# src/tsc_files/cache.py
"""On-disk home for synthesized configs.

Artifacts are named ``tsconfig.<fingerprint>.<random>.json`` inside
``<deps-root>/.cache/tsc-files/``, or the system temp directory when no
``node_modules`` exists above the config. With caching on they persist and
are reused by fingerprint; with caching off they are removed when the
manager closes (or at interpreter exit as a backstop).
"""

import atexit
import json
import secrets
import shutil
import tempfile
import threading
from pathlib import Path
from types import TracebackType
from typing import Any

from .config import CheckOptions, EffectiveConfig
from .constants import (
    CACHE_SUBDIR,
    DEPS_DIR_NAME,
    FINGERPRINT_NAME_LENGTH,
    SYNTH_CONFIG_PREFIX,
    SYNTH_CONFIG_SUFFIX,
)
from .errors import CacheWriteError
from .logs import get_app_logger
from .utils import atomic_write_text


def find_deps_root(start_dir: Path) -> Path | None:
    """Nearest ``node_modules`` at or above ``start_dir``, or None."""
    current = start_dir
    while True:
        candidate = current / DEPS_DIR_NAME
        if candidate.is_dir():
            return candidate
        parent = current.parent
        if parent == current:
            return None
        current = parent


def resolve_cache_dir(config_path: Path, override: Path | None = None) -> Path:
    """Cache directory for the config at ``config_path``.

    Without a ``node_modules`` above the config, artifacts go to the system
    temp directory so no ``node_modules`` is created in the project.
    """
    if override is not None:
        return override
    deps_root = find_deps_root(config_path.parent)
    if deps_root is None:
        return Path(tempfile.gettempdir()) / CACHE_SUBDIR[-1]
    return deps_root.joinpath(*CACHE_SUBDIR)


class CacheManager:
    """Read and write synthesized configs in one cache directory.

    Thread-safe: concurrent writers never share a file name, and the
    temporary-artifact registry is lock protected.
    """

    def __init__(self, directory: Path, *, enabled: bool = True) -> None:
        self.directory = directory
        self.enabled = enabled
        self._temporary: list[Path] = []
        self._lock = threading.Lock()
        self._closed = False
        atexit.register(self.close)

    def __enter__(self) -> "CacheManager":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @staticmethod
    def _prefix(fingerprint: str) -> str:
        return f"{SYNTH_CONFIG_PREFIX}{fingerprint[:FINGERPRINT_NAME_LENGTH]}."

    def lookup(self, fingerprint: str) -> Path | None:
        """Existing artifact for ``fingerprint``, or None (always None if disabled)."""
        if not self.enabled or not self.directory.is_dir():
            return None
        pattern = f"{self._prefix(fingerprint)}*{SYNTH_CONFIG_SUFFIX}"
        for candidate in sorted(self.directory.glob(pattern)):
            if candidate.is_file():
                get_app_logger().trace(f"[cache] hit {candidate.name}")
                return candidate
        return None

    def write(self, fingerprint: str, content: dict[str, Any]) -> Path:
        """Atomically write ``content`` under a fresh name for ``fingerprint``.

        Raises:
            CacheWriteError: the directory or file could not be written.
        """
        name = f"{self._prefix(fingerprint)}{secrets.token_hex(4)}{SYNTH_CONFIG_SUFFIX}"
        path = self.directory / name
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            atomic_write_text(path, json.dumps(content, indent=2) + "\n")
        except OSError as e:
            raise CacheWriteError(path, e) from e

        if not self.enabled:
            with self._lock:
                self._temporary.append(path)
        get_app_logger().trace(f"[cache] wrote {path}")
        return path

    @property
    def temporary_paths(self) -> list[Path]:
        with self._lock:
            return list(self._temporary)

    def close(self) -> None:
        """Remove every temporary artifact written by this manager."""
        logger = get_app_logger()
        with self._lock:
            pending, self._temporary = self._temporary, []
            already_closed, self._closed = self._closed, True
        for path in pending:
            try:
                path.unlink(missing_ok=True)
            except OSError as e:
                logger.warning("Could not remove temporary config %s: %s", path, e)
        if not already_closed:
            atexit.unregister(self.close)

    def clear(self) -> None:
        """Delete the whole cache directory."""
        self.close()
        if self.directory.exists():
            get_app_logger().debug("Clearing cache directory %s", self.directory)
            shutil.rmtree(self.directory)


class CachePool:
    """One ``CacheManager`` per cache directory, closed together."""

    def __init__(self, options: CheckOptions) -> None:
        self.options = options
        self._managers: dict[Path, CacheManager] = {}
        self._lock = threading.Lock()

    def __enter__(self) -> "CachePool":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def for_config(self, config: EffectiveConfig) -> CacheManager:
        directory = resolve_cache_dir(config.path, self.options.cache_dir)
        with self._lock:
            manager = self._managers.get(directory)
            if manager is None:
                manager = CacheManager(directory, enabled=self.options.cache)
                self._managers[directory] = manager
            return manager

    @property
    def managers(self) -> list[CacheManager]:
        with self._lock:
            return list(self._managers.values())

    def close(self) -> None:
        for manager in self.managers:
            manager.close()
