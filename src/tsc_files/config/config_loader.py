# src/tsc_files/config/config_loader.py


import json
from pathlib import Path
from typing import Any

from apathetic_utils import cast_hint, load_jsonc, remove_path_in_error_message

from tsc_files.constants import CONFIG_FILE_NAME, DEPS_DIR_NAME
from tsc_files.errors import ConfigExtendsError, ConfigParseError
from tsc_files.logs import get_app_logger

from .config_types import RawTsConfig


_LIST_KEYS = ("include", "exclude", "files")


def find_config(start_dir: Path) -> Path | None:
    """Locate the nearest tsconfig.json.

    Searches ``start_dir`` and then each parent up to the filesystem root,
    returning the first match (closest to ``start_dir``), or None.
    """
    logger = get_app_logger()
    current = start_dir
    while True:
        candidate = current / CONFIG_FILE_NAME
        logger.trace(f"[find_config] Checking {candidate}")
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:  # Reached filesystem root
            return None
        current = parent


def read_tsconfig(config_path: Path) -> RawTsConfig:
    """Read and shape-check one tsconfig file (no ``extends`` handling).

    Empty files are treated as ``{}``.

    Raises:
        ConfigParseError: not valid JSONC, or a field has the wrong shape.
        OSError: the file cannot be read.
    """
    logger = get_app_logger()
    logger.trace(f"[read_tsconfig] Loading {config_path}")

    try:
        data = load_jsonc(config_path)
    except ValueError as e:
        clean_msg = remove_path_in_error_message(str(e), config_path)
        raise ConfigParseError(config_path, clean_msg) from e

    if data is None:
        logger.debug("Config %s is empty; treating as {}", config_path)
        return RawTsConfig()

    if not isinstance(data, dict):
        raise ConfigParseError(
            config_path,
            f"top-level value must be an object, not {type(data).__name__}",
        )

    _validate_shape(config_path, data)
    return cast_hint(RawTsConfig, data)


def _validate_shape(config_path: Path, data: dict[str, Any]) -> None:
    options = data.get("compilerOptions")
    if options is not None and not isinstance(options, dict):
        raise ConfigParseError(config_path, "'compilerOptions' must be an object")

    for key in _LIST_KEYS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigParseError(config_path, f"'{key}' must be a list of strings")

    extends = data.get("extends")
    if extends is None or isinstance(extends, str):
        return
    if isinstance(extends, list) and all(isinstance(v, str) for v in extends):
        return
    raise ConfigExtendsError(config_path, "must be a string or a list of strings")


def extends_entries(raw: RawTsConfig) -> list[str]:
    extends = raw.get("extends")
    if extends is None:
        return []
    if isinstance(extends, str):
        return [extends]
    return list(extends)


def _is_path_like(spec: str) -> bool:
    return spec.startswith(("./", "../", ".\\", "..\\")) or spec in (".", "..")


def _file_candidate(path: Path) -> Path | None:
    """``path`` itself, ``path`` + .json, or ``path``/tsconfig.json."""
    if path.is_file():
        return path
    if path.suffix != ".json":
        with_json = path.with_name(path.name + ".json")
        if with_json.is_file():
            return with_json
    if path.is_dir():
        nested = path / CONFIG_FILE_NAME
        if nested.is_file():
            return nested
    return None


def _package_config(package_dir: Path) -> Path | None:
    """tsconfig of an installed package directory.

    Uses package.json's ``tsconfig`` field when present, else tsconfig.json.
    """
    manifest = package_dir / "package.json"
    if manifest.is_file():
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except (ValueError, OSError) as e:
            get_app_logger().debug("Ignoring unreadable %s: %s", manifest, e)
        else:
            field = data.get("tsconfig") if isinstance(data, dict) else None
            if isinstance(field, str):
                target = _file_candidate(package_dir / field)
                if target is not None:
                    return target
    nested = package_dir / CONFIG_FILE_NAME
    return nested if nested.is_file() else None


def _resolve_package_spec(spec: str, from_dir: Path) -> Path | None:
    """Require-like lookup of ``spec`` through node_modules directories."""
    logger = get_app_logger()
    current = from_dir
    while True:
        deps = current / DEPS_DIR_NAME
        if deps.is_dir():
            candidate = deps / spec
            logger.trace(f"[resolve_extends] Probing {candidate}")
            if candidate.is_dir():
                found = _package_config(candidate)
            else:
                found = _file_candidate(candidate)
            if found is not None:
                return found
        parent = current.parent
        if parent == current:
            return None
        current = parent


def resolve_extends_target(spec: str, config_path: Path) -> Path:
    """Resolve one ``extends`` entry of ``config_path`` to a file.

    Raises:
        ConfigExtendsError: nothing matches the entry.
    """
    from_dir = config_path.parent
    spec_path = Path(spec)

    if spec_path.is_absolute() or _is_path_like(spec):
        target = _file_candidate((from_dir / spec_path).resolve())
    else:
        target = _resolve_package_spec(spec, from_dir)

    if target is None:
        raise ConfigExtendsError(config_path, f"cannot resolve {spec!r}")
    return target.resolve()
