# src/tsc_files/config/__init__.py

"""tsconfig.json discovery, parsing and ``extends`` resolution, plus run options."""

from .check_options import CheckOptions, resolve_check_options, split_include
from .config_loader import (
    extends_entries,
    find_config,
    read_tsconfig,
    resolve_extends_target,
)
from .config_locator import ConfigCache, ConfigLocator, merge_chain
from .config_types import CompilerOptions, EffectiveConfig, RawTsConfig


__all__ = [  # noqa: RUF022
    # check_options
    "CheckOptions",
    "resolve_check_options",
    "split_include",
    # config_loader
    "extends_entries",
    "find_config",
    "read_tsconfig",
    "resolve_extends_target",
    # config_locator
    "ConfigCache",
    "ConfigLocator",
    "merge_chain",
    # config_types
    "CompilerOptions",
    "EffectiveConfig",
    "RawTsConfig",
]
