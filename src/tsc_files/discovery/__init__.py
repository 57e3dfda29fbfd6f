# src/tsc_files/discovery/__init__.py

"""Dependency discovery: static imports, ambient declarations, setup files."""

from .ambient import declaration_patterns, find_declaration_files
from .engine import CancelToken, DependencyDiscovery, DiscoveryLimits, DiscoveryState
from .resolver import ModuleResolver, companion_files, is_checkable
from .scanner import Specifier, scan_file, scan_specifiers, strip_comments
from .setup_files import (
    conventional_setup_files,
    find_setup_files,
    has_test_files,
    setup_files_from_framework_config,
)


__all__ = [  # noqa: RUF022
    # ambient
    "declaration_patterns",
    "find_declaration_files",
    # engine
    "CancelToken",
    "DependencyDiscovery",
    "DiscoveryLimits",
    "DiscoveryState",
    # resolver
    "ModuleResolver",
    "companion_files",
    "is_checkable",
    # scanner
    "Specifier",
    "scan_file",
    "scan_specifiers",
    "strip_comments",
    # setup_files
    "conventional_setup_files",
    "find_setup_files",
    "has_test_files",
    "setup_files_from_framework_config",
]
