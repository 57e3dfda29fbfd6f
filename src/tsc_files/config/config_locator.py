# src/tsc_files/config/config_locator.py
"""Find the tsconfig.json that governs a directory and merge its extends chain."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from tsc_files.constants import CONFIG_FILE_NAME
from tsc_files.errors import ConfigExtendsError, ConfigNotFoundError
from tsc_files.logs import get_app_logger
from tsc_files.utils import shorten_path_for_display

from .config_loader import (
    extends_entries,
    find_config,
    read_tsconfig,
    resolve_extends_target,
)
from .config_types import PATH_LIST_OPTIONS, PATH_OPTIONS, EffectiveConfig, RawTsConfig


@dataclass
class ConfigCache:
    """Memoised lookups shared by one locator.

    Not thread-safe; grouping (the only user) runs sequentially.
    """

    origins: dict[Path, Path | None] = field(default_factory=dict)
    configs: dict[Path, EffectiveConfig] = field(default_factory=dict)
    raw: dict[Path, RawTsConfig] = field(default_factory=dict)

    def clear(self) -> None:
        self.origins.clear()
        self.configs.clear()
        self.raw.clear()


def _absolutize_option(key: str, value: Any, root: Path) -> Any:
    if key in PATH_OPTIONS and isinstance(value, str):
        return os.path.normpath(root / value)
    if key in PATH_LIST_OPTIONS and isinstance(value, list):
        return [
            os.path.normpath(root / v) if isinstance(v, str) else v for v in value
        ]
    return value


def _merge_list(base: list[Any], override: list[Any]) -> list[Any]:
    merged = list(base)
    for item in override:
        if item not in merged:
            merged.append(item)
    return merged


def _rebase_patterns(patterns: list[str], from_dir: Path, to_dir: Path) -> list[str]:
    if from_dir == to_dir:
        return list(patterns)
    rebased: list[str] = []
    for pattern in patterns:
        if Path(pattern).is_absolute():
            rebased.append(pattern)
            continue
        rel = os.path.relpath(from_dir / pattern, to_dir)
        rebased.append(Path(rel).as_posix())
    return rebased


def merge_chain(chain: list[tuple[Path, RawTsConfig]]) -> EffectiveConfig:
    """Fold a most-base-first chain into one ``EffectiveConfig``.

    Compiler options override key by key; list-valued options concatenate
    base-first without duplicates; object-valued options are replaced.
    ``include``/``exclude``/``files`` are replaced by the closest config
    that sets them.
    """
    options: dict[str, Any] = {}
    option_roots: dict[str, Path] = {}
    lists: dict[str, tuple[list[str], Path]] = {}

    for config_path, raw in chain:
        root = config_path.parent
        for key, value in (raw.get("compilerOptions") or {}).items():
            value = _absolutize_option(key, value, root)  # noqa: PLW2901
            previous = options.get(key)
            if isinstance(value, list) and isinstance(previous, list):
                options[key] = _merge_list(previous, value)
            else:
                options[key] = value
            option_roots[key] = root

        for key in ("include", "exclude", "files"):
            value = raw.get(key)
            if value is not None:
                lists[key] = (list(value), root)

    origin = chain[-1][0]
    files_root = origin.parent
    for key in ("include", "files", "exclude"):
        if key in lists:
            files_root = lists[key][1]
            break

    def _list(key: str) -> list[str] | None:
        if key not in lists:
            return None
        patterns, root = lists[key]
        return _rebase_patterns(patterns, root, files_root)

    return EffectiveConfig(
        path=origin,
        compiler_options=options,
        include=_list("include"),
        exclude=_list("exclude"),
        files=_list("files"),
        option_roots=option_roots,
        files_root=files_root,
        chain=tuple(path for path, _ in chain),
    )


class ConfigLocator:
    """Resolve directories and explicit paths to ``EffectiveConfig``s."""

    def __init__(self, cache: ConfigCache | None = None) -> None:
        self.cache = cache if cache is not None else ConfigCache()

    def find(self, start_dir: Path) -> Path:
        """Origin config path for ``start_dir``.

        Raises:
            ConfigNotFoundError: no tsconfig.json up to the filesystem root.
        """
        start_dir = start_dir.resolve()
        if start_dir not in self.cache.origins:
            self.cache.origins[start_dir] = find_config(start_dir)
        origin = self.cache.origins[start_dir]
        if origin is None:
            raise ConfigNotFoundError(start_dir)
        return origin

    def resolve(self, start_dir: Path) -> EffectiveConfig:
        return self.load(self.find(start_dir))

    def resolve_file(self, path: Path) -> EffectiveConfig:
        return self.resolve(path.resolve().parent)

    def load(self, config_path: Path) -> EffectiveConfig:
        """Load an explicit config (a file, or a directory holding one).

        Raises:
            ConfigNotFoundError: the path does not exist.
            ConfigParseError: the file (or one it extends) is not valid.
            ConfigExtendsError: an ``extends`` entry is unresolvable or cyclic.
        """
        config_path = config_path.resolve()
        if config_path.is_dir():
            config_path = config_path / CONFIG_FILE_NAME
        if not config_path.is_file():
            raise ConfigNotFoundError(config_path, explicit=True)

        cached = self.cache.configs.get(config_path)
        if cached is not None:
            return cached

        logger = get_app_logger()
        chain = self._chain(config_path, ())
        effective = merge_chain(chain)
        logger.debug(
            "Resolved %s (extends chain: %s)",
            shorten_path_for_display(config_path, cwd=Path.cwd()),
            " -> ".join(p.name for p in effective.chain),
        )
        self.cache.configs[config_path] = effective
        return effective

    def _raw(self, config_path: Path) -> RawTsConfig:
        if config_path not in self.cache.raw:
            self.cache.raw[config_path] = read_tsconfig(config_path)
        return self.cache.raw[config_path]

    def _chain(
        self,
        config_path: Path,
        stack: tuple[Path, ...],
    ) -> list[tuple[Path, RawTsConfig]]:
        """Most-base-first list of (path, raw) for ``config_path``."""
        if config_path in stack:
            cycle = " -> ".join(str(p) for p in (*stack, config_path))
            raise ConfigExtendsError(stack[-1], f"circular reference ({cycle})")

        raw = self._raw(config_path)
        chain: list[tuple[Path, RawTsConfig]] = []
        for spec in extends_entries(raw):
            target = resolve_extends_target(spec, config_path)
            chain.extend(self._chain(target, (*stack, config_path)))
        chain.append((config_path, raw))
        return chain
