# src/tsc_files/__init__.py

"""tsc-files: type-check a subset of files with each project's own tsconfig.

Full developer API
==================
This package re-exports all non-private symbols from its submodules,
making it suitable for programmatic use and custom integrations.
Anything prefixed with "_" is considered internal and may change.

Highlights:
    - main()              → CLI entrypoint (prints the per-group plan)
    - check_files()       → Prepare groups and run a CompilerRunner on each
    - prepare_check()     → Group, discover and synthesize without running
    - ConfigLocator       → Resolve tsconfig.json files and extends chains
"""

from .cache import CacheManager, CachePool, find_deps_root, resolve_cache_dir
from .checker import (
    CheckResult,
    CompilerRunner,
    PreparedGroup,
    check_files,
    prepare_check,
)
from .cli import main
from .config import (
    CheckOptions,
    ConfigCache,
    ConfigLocator,
    EffectiveConfig,
    RawTsConfig,
    find_config,
    resolve_check_options,
)
from .discovery import CancelToken, DependencyDiscovery, DiscoveryLimits
from .errors import (
    EXIT_CODES,
    CacheWriteError,
    CheckCancelledError,
    ConfigError,
    ConfigExtendsError,
    ConfigNotFoundError,
    ConfigParseError,
    DiscoveryLimitExceeded,
    TscFilesError,
    categorize_error,
    exit_code_for,
)
from .file_resolver import resolve_input_files
from .grouping import FileGroup, group_files
from .logs import get_app_logger
from .meta import (
    PROGRAM_CONFIG,
    PROGRAM_DISPLAY,
    PROGRAM_ENV,
    PROGRAM_PACKAGE,
    PROGRAM_SCRIPT,
    Metadata,
    get_metadata,
)
from .synthesize import ConfigSynthesizer, SynthesizedConfig, compute_fingerprint


__all__ = [  # noqa: RUF022
    # cache
    "CacheManager",
    "CachePool",
    "find_deps_root",
    "resolve_cache_dir",
    # checker
    "CheckResult",
    "CompilerRunner",
    "PreparedGroup",
    "check_files",
    "prepare_check",
    # cli
    "main",
    # config
    "CheckOptions",
    "ConfigCache",
    "ConfigLocator",
    "EffectiveConfig",
    "RawTsConfig",
    "find_config",
    "resolve_check_options",
    # discovery
    "CancelToken",
    "DependencyDiscovery",
    "DiscoveryLimits",
    # errors
    "EXIT_CODES",
    "CacheWriteError",
    "CheckCancelledError",
    "ConfigError",
    "ConfigExtendsError",
    "ConfigNotFoundError",
    "ConfigParseError",
    "DiscoveryLimitExceeded",
    "TscFilesError",
    "categorize_error",
    "exit_code_for",
    # file_resolver
    "resolve_input_files",
    # grouping
    "FileGroup",
    "group_files",
    # logs
    "get_app_logger",
    # meta
    "PROGRAM_CONFIG",
    "PROGRAM_DISPLAY",
    "PROGRAM_ENV",
    "PROGRAM_PACKAGE",
    "PROGRAM_SCRIPT",
    "Metadata",
    "get_metadata",
    # synthesize
    "ConfigSynthesizer",
    "SynthesizedConfig",
    "compute_fingerprint",
]
