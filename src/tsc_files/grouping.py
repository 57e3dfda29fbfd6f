# src/tsc_files/grouping.py
"""Partition input files by the tsconfig.json that governs them."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .config import ConfigLocator, EffectiveConfig
from .errors import DiscoveryLimitExceeded
from .logs import get_app_logger


@dataclass
class FileGroup:
    config: EffectiveConfig
    files: list[Path] = field(default_factory=list)
    dependencies: list[Path] = field(default_factory=list)
    notices: list[DiscoveryLimitExceeded] = field(default_factory=list)

    @property
    def all_files(self) -> list[Path]:
        """Inputs followed by discovered dependencies."""
        return [*self.files, *self.dependencies]


def group_files(
    files: Iterable[Path],
    locator: ConfigLocator,
    project: Path | None = None,
) -> list[FileGroup]:
    """Group ``files`` by origin config, in order of first appearance.

    With ``project`` every file joins that one config. Locator errors
    propagate; no input is ever dropped.
    """
    logger = get_app_logger()
    groups: dict[Path, FileGroup] = {}
    seen: set[Path] = set()

    explicit = locator.load(project) if project is not None else None

    for raw_path in files:
        path = raw_path.resolve()
        if path in seen:
            continue
        seen.add(path)

        config = explicit if explicit is not None else locator.resolve_file(path)
        group = groups.get(config.path)
        if group is None:
            group = FileGroup(config=config)
            groups[config.path] = group
            logger.trace(f"[group_files] New group for {config.path}")
        group.files.append(path)

    logger.debug(
        "Grouped %d file(s) into %d config group(s)", len(seen), len(groups)
    )
    return list(groups.values())
