# src/tsc_files/config/config_types.py


from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TypedDict

from typing_extensions import NotRequired

from tsc_files.constants import DEFAULT_EXCLUDES, DEFAULT_INCLUDE


# compilerOptions whose values are paths relative to the declaring config
PATH_OPTIONS: frozenset[str] = frozenset(
    {"baseUrl", "outDir", "rootDir", "declarationDir", "tsBuildInfoFile"}
)
PATH_LIST_OPTIONS: frozenset[str] = frozenset({"typeRoots", "rootDirs"})


class CompilerOptions(TypedDict, total=False):
    # Only the keys this tool reads; everything else passes through untouched.
    allowJs: bool
    checkJs: bool
    baseUrl: str
    paths: dict[str, list[str]]
    composite: bool
    incremental: bool
    tsBuildInfoFile: str
    outDir: str
    noEmit: bool
    skipLibCheck: bool
    types: list[str]
    typeRoots: list[str]
    lib: list[str]


class RawTsConfig(TypedDict, total=False):
    extends: NotRequired[str | list[str]]
    compilerOptions: NotRequired[CompilerOptions]
    include: NotRequired[list[str]]
    exclude: NotRequired[list[str]]
    files: NotRequired[list[str]]
    references: NotRequired[list[dict[str, str]]]


@dataclass(frozen=True)
class EffectiveConfig:
    """A tsconfig.json with its whole ``extends`` chain merged in.

    Path-valued compiler options (``baseUrl``, ``outDir``, ``typeRoots``...)
    are stored absolute. ``include``/``exclude``/``files`` stay as written,
    relative to ``files_root``; ``None`` means no config in the chain set them.
    """

    path: Path
    compiler_options: dict[str, Any]
    include: list[str] | None
    exclude: list[str] | None
    files: list[str] | None
    option_roots: dict[str, Path]
    files_root: Path
    chain: tuple[Path, ...] = field(default=())

    @property
    def directory(self) -> Path:
        return self.path.parent

    @property
    def composite(self) -> bool:
        return self.compiler_options.get("composite") is True

    @property
    def ts_build_info_file(self) -> str | None:
        value = self.compiler_options.get("tsBuildInfoFile")
        return value if isinstance(value, str) else None

    @property
    def base_url(self) -> Path | None:
        value = self.compiler_options.get("baseUrl")
        return Path(value) if isinstance(value, str) else None

    @property
    def paths(self) -> dict[str, list[str]]:
        value = self.compiler_options.get("paths")
        if not isinstance(value, dict):
            return {}
        return {
            k: [t for t in v if isinstance(t, str)]
            for k, v in value.items()
            if isinstance(v, list)
        }

    @property
    def paths_root(self) -> Path:
        """Directory that ``paths`` targets are relative to."""
        base = self.base_url
        if base is not None:
            return base
        return self.option_roots.get("paths", self.directory)

    @property
    def allows_js(self) -> bool:
        return bool(
            self.compiler_options.get("allowJs") or self.compiler_options.get("checkJs")
        )

    @property
    def out_dir(self) -> Path | None:
        value = self.compiler_options.get("outDir")
        return Path(value) if isinstance(value, str) else None

    @property
    def include_patterns(self) -> list[str]:
        """``include`` as the compiler applies it (``files`` alone means none)."""
        if self.include is not None:
            return list(self.include)
        if self.files is not None:
            return []
        return list(DEFAULT_INCLUDE)

    @property
    def exclude_patterns(self) -> list[str]:
        """``exclude`` as the compiler applies it, plus ``outDir``."""
        patterns = (
            list(self.exclude) if self.exclude is not None else list(DEFAULT_EXCLUDES)
        )
        out_dir = self.out_dir
        if out_dir is not None:
            patterns.append(str(out_dir))
        return patterns
