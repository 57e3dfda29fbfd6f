# src/tsc_files/synthesize.py


import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .cache import CacheManager, CachePool
from .config import CheckOptions, EffectiveConfig
from .constants import BUILD_INFO_SUFFIX, SYNTH_CONFIG_PREFIX
from .discovery import CancelToken
from .grouping import FileGroup
from .logs import get_app_logger
from .utils import sha256_file, shorten_path_for_display, to_posix_relpath


@dataclass(frozen=True)
class SynthesizedConfig:
    path: Path
    fingerprint: str
    files: list[Path]
    content: dict[str, Any]
    cached: bool = False
    temporary: bool = False


def build_info_path(config: EffectiveConfig, cache_dir: Path) -> Path:
    """Per-origin tsbuildinfo location inside the cache directory."""
    digest = hashlib.sha256(str(config.path).encode("utf-8")).hexdigest()[:16]
    return cache_dir / f"{SYNTH_CONFIG_PREFIX}{digest}{BUILD_INFO_SUFFIX}"


def needs_build_info_redirect(config: EffectiveConfig) -> bool:
    return config.composite and config.ts_build_info_file is None


def resolve_extra_includes(options: CheckOptions) -> list[Path]:
    """Extra include paths resolved against ``options.cwd``; missing ones skipped."""
    logger = get_app_logger()
    result: list[Path] = []
    for raw in options.include:
        path = (options.cwd / raw).resolve()
        if not path.is_file():
            logger.warning("Extra include not found, skipping: %s", raw)
            continue
        result.append(path)
    return result


def compute_fingerprint(
    config: EffectiveConfig,
    files: list[Path],
    options: CheckOptions,
) -> str:
    """Content hash of everything that shapes a synthesized config.

    Covers every config in the extends chain, the file list, each file's
    content and the override flags. Timestamps play no part.
    """
    digest = hashlib.sha256()
    for config_path in config.chain:
        digest.update(str(config_path).encode("utf-8"))
        digest.update(b"\0")
        digest.update(config_path.read_bytes())
        digest.update(b"\0")

    for path in sorted(files):
        digest.update(str(path).encode("utf-8"))
        digest.update(b"\0")
        digest.update(sha256_file(path).encode("ascii"))
        digest.update(b"\0")

    flags = {
        "skipLibCheck": options.skip_lib_check,
        "noEmit": options.no_emit,
        "buildInfoRedirect": needs_build_info_redirect(config),
        "recursive": options.recursive,
        "maxDepth": options.max_depth,
        "maxFiles": options.max_files,
    }
    digest.update(json.dumps(flags, sort_keys=True).encode("utf-8"))
    return digest.hexdigest()


class ConfigSynthesizer:
    """Write (or reuse) the derived tsconfig for one expanded group."""

    def __init__(self, caches: CachePool) -> None:
        self.caches = caches

    def synthesize(
        self,
        group: FileGroup,
        options: CheckOptions,
        cancel: CancelToken | None = None,
    ) -> SynthesizedConfig:
        """
        Raises:
            CacheWriteError: the artifact could not be written.
            CheckCancelledError: cancelled before writing.
            OSError: a listed file or config could not be read.
        """
        logger = get_app_logger()
        config = group.config
        cache = self.caches.for_config(config)

        files: list[Path] = []
        for path in (*group.files, *group.dependencies, *resolve_extra_includes(options)):
            if path not in files:
                files.append(path)

        content = self.build_content(config, files, options, cache)
        fingerprint = compute_fingerprint(config, files, options)

        hit = cache.lookup(fingerprint)
        if hit is not None:
            logger.debug(
                "Reusing cached config %s for %s",
                hit.name,
                shorten_path_for_display(config.path, cwd=options.cwd),
            )
            return SynthesizedConfig(hit, fingerprint, files, content, cached=True)

        if cancel is not None:
            cancel.check()

        path = cache.write(fingerprint, content)
        logger.debug(
            "Wrote config %s (%d files) for %s",
            path.name,
            len(files),
            shorten_path_for_display(config.path, cwd=options.cwd),
        )
        return SynthesizedConfig(
            path, fingerprint, files, content, temporary=not cache.enabled
        )

    @staticmethod
    def build_content(
        config: EffectiveConfig,
        files: list[Path],
        options: CheckOptions,
        cache: CacheManager,
    ) -> dict[str, Any]:
        compiler_options: dict[str, Any] = {}
        if options.no_emit:
            compiler_options["noEmit"] = True
        compiler_options["skipLibCheck"] = options.skip_lib_check
        if needs_build_info_redirect(config):
            compiler_options["tsBuildInfoFile"] = str(
                build_info_path(config, cache.directory)
            )

        return {
            "extends": str(config.path),
            "compilerOptions": compiler_options,
            "files": [to_posix_relpath(path, cache.directory) for path in files],
            "include": [],
        }
