# src/tsc_files/discovery/engine.py


import threading
import time
from collections import deque
from dataclasses import dataclass, field, replace
from pathlib import Path

from tsc_files.config import CheckOptions
from tsc_files.constants import DEFAULT_MAX_DEPTH, DEFAULT_MAX_FILES, DEFAULT_RECURSIVE
from tsc_files.errors import CheckCancelledError, DiscoveryLimitExceeded
from tsc_files.grouping import FileGroup
from tsc_files.logs import get_app_logger
from tsc_files.utils import shorten_path_for_display

from .ambient import find_declaration_files
from .resolver import ModuleResolver, is_checkable
from .scanner import scan_file
from .setup_files import find_setup_files, has_test_files


@dataclass(frozen=True)
class DiscoveryLimits:
    max_depth: int = DEFAULT_MAX_DEPTH
    max_files: int = DEFAULT_MAX_FILES
    recursive: bool = DEFAULT_RECURSIVE
    # setup files are only added when the caller gave no extra includes
    setup_files: bool = True

    @classmethod
    def from_options(cls, options: CheckOptions) -> "DiscoveryLimits":
        return cls(
            max_depth=options.max_depth,
            max_files=options.max_files,
            recursive=options.recursive,
            setup_files=not options.include,
        )


class CancelToken:
    """Cooperative cancellation: an optional deadline plus an explicit flag."""

    def __init__(self, timeout: float | None = None) -> None:
        self._event = threading.Event()
        self.deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self) -> None:
        """Raise ``CheckCancelledError`` once cancelled or past the deadline."""
        if self._event.is_set():
            xmsg = "Check cancelled"
            raise CheckCancelledError(xmsg)
        if self.deadline is not None and time.monotonic() >= self.deadline:
            xmsg = "Check cancelled: deadline exceeded"
            raise CheckCancelledError(xmsg)


@dataclass
class DiscoveryState:
    """Mutable traversal state for one ``expand`` call."""

    inputs: list[Path]
    limits: DiscoveryLimits
    config_path: Path
    queue: deque[tuple[Path, int]] = field(default_factory=deque)
    visited: set[Path] = field(default_factory=set)
    depths: dict[Path, int] = field(default_factory=dict)
    discovered: list[Path] = field(default_factory=list)
    notices: list[DiscoveryLimitExceeded] = field(default_factory=list)
    halted: bool = False

    def __post_init__(self) -> None:
        for path in self.inputs:
            if path not in self.visited:
                self.visited.add(path)
                self.depths[path] = 0
                self.queue.append((path, 0))

    @property
    def max_depth_reached(self) -> int:
        return max(self.depths.values(), default=0)

    def add(self, path: Path, depth: int, *, traverse: bool = True) -> bool:
        """Record ``path``; False once the file cap stops discovery."""
        if path in self.visited:
            return True
        if self.halted or len(self.visited) >= self.limits.max_files:
            self._halt()
            return False
        self.visited.add(path)
        self.depths[path] = depth
        self.discovered.append(path)
        if traverse:
            self.queue.append((path, depth))
        return True

    def _halt(self) -> None:
        if self.halted:
            return
        self.halted = True
        self.queue.clear()
        self.notices.append(
            DiscoveryLimitExceeded(
                kind="files",
                limit=self.limits.max_files,
                files_reached=len(self.visited),
                depth_reached=self.max_depth_reached,
                config_path=self.config_path,
            )
        )

    def note_depth_limit(self) -> None:
        if any(n.kind == "depth" for n in self.notices):
            return
        self.notices.append(
            DiscoveryLimitExceeded(
                kind="depth",
                limit=self.limits.max_depth,
                files_reached=len(self.visited),
                depth_reached=self.limits.max_depth,
                config_path=self.config_path,
            )
        )


class DependencyDiscovery:
    """Expand a file group with the local files its inputs depend on.

    Breadth-first over static imports, then ambient declaration files from
    ``include``, then test setup files. Returns a new group; the input group
    is not modified, so repeated calls give the same result.
    """

    def expand(
        self,
        group: FileGroup,
        limits: DiscoveryLimits,
        cancel: CancelToken | None = None,
    ) -> FileGroup:
        logger = get_app_logger()
        config = group.config
        resolver = ModuleResolver(config)
        state = DiscoveryState(list(group.files), limits, config.path)

        if limits.recursive:
            self._traverse(state, resolver, cancel)

        if not state.halted:
            for path in find_declaration_files(config):
                if not state.add(path, 0, traverse=False):
                    break

        if (
            not state.halted
            and limits.setup_files
            and has_test_files(group.files, config.directory)
        ):
            for path in find_setup_files(config.directory):
                if not is_checkable(path, allow_js=config.allows_js):
                    logger.debug("Skipping JS setup file without allowJs: %s", path)
                    continue
                if not state.add(path, 0, traverse=False):
                    break
                logger.debug("Including setup file %s", path)

        for notice in state.notices:
            logger.info(notice.message)

        logger.debug(
            "Discovered %d dependencies for %s",
            len(state.discovered),
            shorten_path_for_display(config.path, cwd=Path.cwd()),
        )
        return replace(
            group,
            files=list(group.files),
            dependencies=list(state.discovered),
            notices=list(state.notices),
        )

    def _traverse(
        self,
        state: DiscoveryState,
        resolver: ModuleResolver,
        cancel: CancelToken | None,
    ) -> None:
        max_depth = state.limits.max_depth
        while state.queue:
            if cancel is not None:
                cancel.check()
            node, depth = state.queue.popleft()

            if depth >= max_depth:
                if self._would_add(state, resolver, node):
                    state.note_depth_limit()
                continue

            for spec in scan_file(node):
                for target in resolver.resolve(spec, node):
                    if not state.add(target, depth + 1):
                        return

    @staticmethod
    def _would_add(state: DiscoveryState, resolver: ModuleResolver, node: Path) -> bool:
        return any(
            target not in state.visited
            for spec in scan_file(node)
            for target in resolver.resolve(spec, node)
        )
