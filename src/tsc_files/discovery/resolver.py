# src/tsc_files/discovery/resolver.py


import os
from pathlib import Path

from tsc_files.config import EffectiveConfig
from tsc_files.constants import (
    DECLARATION_SUFFIXES,
    GENERATED_SUFFIX,
    JS_EXTENSIONS,
    JS_PROBE_SUFFIXES,
    JS_TO_TS_SUFFIXES,
    TS_EXTENSIONS,
    TS_PROBE_SUFFIXES,
)
from tsc_files.logs import get_app_logger
from tsc_files.utils import is_in_deps_dir

from .scanner import Specifier


# Longest first so ".d.ts" wins over ".ts"
_STRIPPABLE_SUFFIXES = tuple(
    sorted(
        {*DECLARATION_SUFFIXES, GENERATED_SUFFIX, *TS_EXTENSIONS, *JS_EXTENSIONS},
        key=len,
        reverse=True,
    )
)


def is_checkable(path: Path, *, allow_js: bool) -> bool:
    """True for files the compiler accepts in ``files``."""
    name = path.name
    if name.endswith(TS_EXTENSIONS):
        return True
    return allow_js and name.endswith(JS_EXTENSIONS)


def is_external_specifier(spec: str) -> bool:
    """Builtins, URLs and similar specifiers we never resolve on disk."""
    return ":" in spec.split("/", 1)[0] or spec.startswith("#")


def is_relative_specifier(spec: str) -> bool:
    return spec in (".", "..") or spec.startswith(("./", "../"))


def strip_source_suffix(name: str) -> str:
    for suffix in _STRIPPABLE_SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


# Companion suffixes by the resolved file's extension
_COMPANION_SUFFIXES: dict[str, tuple[str, ...]] = {
    ".mts": (".d.mts",),
    ".mjs": (".d.mts",),
    ".cts": (".d.cts",),
    ".cjs": (".d.cts",),
}
_DEFAULT_COMPANIONS: tuple[str, ...] = (".d.ts", GENERATED_SUFFIX)


def companion_files(path: Path) -> list[Path]:
    """Existing sibling declaration/``.gen.ts`` files of a resolved module.

    ``foo.mts`` pairs with ``foo.d.mts`` and ``foo.cts`` with ``foo.d.cts``;
    everything else with ``foo.d.ts`` and ``foo.gen.ts``.
    """
    stem = strip_source_suffix(path.name)
    companions: list[Path] = []
    for suffix in _COMPANION_SUFFIXES.get(path.suffix, _DEFAULT_COMPANIONS):
        candidate = path.with_name(stem + suffix)
        if candidate != path and candidate.is_file():
            companions.append(candidate)
    return companions


class ModuleResolver:
    """Map import specifiers to local files the way the config would.

    Order: relative/absolute, then ``paths`` (exact, then longest wildcard
    prefix), then ``baseUrl``. Anything else resolves to nothing.
    """

    def __init__(self, config: EffectiveConfig) -> None:
        self.config = config
        self.allow_js = config.allows_js
        self._probe_suffixes = TS_PROBE_SUFFIXES + (
            JS_PROBE_SUFFIXES if self.allow_js else ()
        )
        self._paths = config.paths
        self._paths_root = config.paths_root
        self._base_url = config.base_url

    def resolve(self, spec: Specifier, importer: Path) -> list[Path]:
        """Resolved file for ``spec`` plus its companions ([] if unresolved)."""
        target = self._resolve_target(spec, importer)
        if target is None:
            get_app_logger().trace(
                f"[resolve] unresolved {spec.value!r} from {importer.name}"
            )
            return []
        return [target, *companion_files(target)]

    def _resolve_target(self, spec: Specifier, importer: Path) -> Path | None:
        value = spec.value
        if spec.kind == "reference":
            return self.probe(importer.parent / value)

        if is_relative_specifier(value) or Path(value).is_absolute():
            return self.probe(importer.parent / value)

        if is_external_specifier(value):
            return None

        for target in self._paths_candidates(value):
            found = self.probe(self._paths_root / target)
            if found is not None:
                return found

        if self._base_url is not None:
            return self.probe(self._base_url / value)

        return None

    def _paths_candidates(self, value: str) -> list[str]:
        if not self._paths:
            return []

        exact = self._paths.get(value)
        if exact is not None and "*" not in value:
            return exact

        best_prefix_len = -1
        best: list[str] = []
        for pattern, targets in self._paths.items():
            if pattern.count("*") != 1:
                continue
            prefix, suffix = pattern.split("*")
            if not (value.startswith(prefix) and value.endswith(suffix)):
                continue
            if len(value) < len(prefix) + len(suffix):
                continue
            if len(prefix) > best_prefix_len:
                best_prefix_len = len(prefix)
                star = value[len(prefix) : len(value) - len(suffix)]
                best = [t.replace("*", star) for t in targets]
        return best

    def probe(self, base: Path) -> Path | None:
        """First existing checkable file for a specifier base path."""
        base = Path(os.path.normpath(base))
        for candidate in self._candidates(base):
            if is_in_deps_dir(candidate):
                continue
            if candidate.is_file():
                return candidate
        return None

    def _candidates(self, base: Path) -> list[Path]:
        name = base.name
        candidates: list[Path] = []

        for js_suffix, ts_suffixes in JS_TO_TS_SUFFIXES.items():
            if name.endswith(js_suffix):
                stem = name[: -len(js_suffix)]
                candidates.extend(base.with_name(stem + s) for s in ts_suffixes)
                break

        if is_checkable(base, allow_js=self.allow_js):
            candidates.append(base)

        if name:
            candidates.extend(base.with_name(name + s) for s in self._probe_suffixes)
        candidates.extend(base / f"index{s}" for s in self._probe_suffixes)
        return candidates
