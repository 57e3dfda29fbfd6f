# src/tsc_files/checker.py
"""The check pipeline: group, discover, synthesize, then hand off to a runner."""

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from .cache import CachePool
from .config import CheckOptions, ConfigLocator
from .discovery import CancelToken, DependencyDiscovery, DiscoveryLimits
from .grouping import FileGroup, group_files
from .logs import get_app_logger
from .synthesize import ConfigSynthesizer, SynthesizedConfig


@dataclass(frozen=True)
class PreparedGroup:
    """A group ready for ``tsc --project <config_path>``."""

    config_path: Path
    files: list[Path]
    group: FileGroup
    synthesized: SynthesizedConfig


@dataclass
class CheckResult:
    success: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    checked_files: list[Path] = field(default_factory=list)
    duration: float = 0.0

    @classmethod
    def merge(cls, results: Sequence["CheckResult"]) -> "CheckResult":
        merged = cls(success=all(r.success for r in results))
        for result in results:
            merged.errors.extend(result.errors)
            merged.warnings.extend(result.warnings)
            merged.checked_files.extend(result.checked_files)
            merged.duration += result.duration
        return merged


class CompilerRunner(Protocol):
    """Runs the type checker against one synthesized config."""

    def run(self, config_path: Path, files: list[Path]) -> CheckResult: ...


def prepare_check(
    files: Iterable[Path],
    options: CheckOptions,
    caches: CachePool,
    *,
    locator: ConfigLocator | None = None,
    cancel: CancelToken | None = None,
) -> list[PreparedGroup]:
    """Group ``files`` and synthesize one config per group.

    Groups are processed on a thread pool when ``options.jobs > 1``.
    Temporary artifacts belong to ``caches``; the caller closes it once the
    compiler has run.
    """
    logger = get_app_logger()
    if cancel is None and options.deadline is not None:
        cancel = CancelToken(options.deadline)
    if locator is None:
        locator = ConfigLocator()

    groups = group_files(files, locator, options.project)
    if not groups:
        logger.debug("No input files; nothing to prepare")
        return []

    limits = DiscoveryLimits.from_options(options)
    discovery = DependencyDiscovery()
    synthesizer = ConfigSynthesizer(caches)

    def _prepare(group: FileGroup) -> PreparedGroup:
        expanded = discovery.expand(group, limits, cancel)
        synthesized = synthesizer.synthesize(expanded, options, cancel)
        return PreparedGroup(
            config_path=synthesized.path,
            files=synthesized.files,
            group=expanded,
            synthesized=synthesized,
        )

    if options.jobs <= 1 or len(groups) == 1:
        return [_prepare(group) for group in groups]

    workers = min(options.jobs, len(groups))
    logger.debug("Preparing %d groups on %d workers", len(groups), workers)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [executor.submit(_prepare, group) for group in groups]
        try:
            return [future.result() for future in futures]
        except BaseException:
            if cancel is not None:
                cancel.cancel()
            for future in futures:
                future.cancel()
            raise


def check_files(
    files: Iterable[Path],
    options: CheckOptions,
    runner: CompilerRunner,
    *,
    locator: ConfigLocator | None = None,
) -> CheckResult:
    """Prepare every group, run ``runner`` on each, and merge the results.

    Temporary configs are removed before returning, also when the runner
    raises.
    """
    cancel = CancelToken(options.deadline) if options.deadline is not None else None
    with CachePool(options) as caches:
        prepared = prepare_check(files, options, caches, locator=locator, cancel=cancel)
        results: list[CheckResult] = []
        for item in prepared:
            if cancel is not None:
                cancel.check()
            results.append(runner.run(item.config_path, item.files))
    return CheckResult.merge(results)
