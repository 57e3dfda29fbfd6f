# src/tsc_files/cli.py

import argparse
import json
import platform
import sys
from difflib import get_close_matches
from pathlib import Path
from typing import Any

from .cache import CachePool, resolve_cache_dir
from .checker import PreparedGroup, prepare_check
from .config import CheckOptions, ConfigLocator, resolve_check_options
from .constants import LOG_LEVEL_CHOICES
from .errors import EXIT_CODES, ConfigNotFoundError, TscFilesError, exit_code_for
from .file_resolver import resolve_input_files
from .logs import get_app_logger
from .meta import PROGRAM_DISPLAY, PROGRAM_SCRIPT, get_metadata
from .utils import shorten_path_for_display


# --------------------------------------------------------------------------- #
# CLI setup and helpers
# --------------------------------------------------------------------------- #


class HintingArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        # Build known option strings: ["-v", "--verbose", "--log-level", ...]
        known_opts: list[str] = []
        for action in self._actions:
            known_opts.extend([s for s in action.option_strings if s])

        hint_lines: list[str] = []
        # "unrecognized arguments: --max-file ..."
        if "unrecognized arguments:" in message:
            bad = message.split("unrecognized arguments:", 1)[1].strip()
            bad_args = [tok for tok in bad.split() if tok.startswith("-")]
            for arg in bad_args:
                close = get_close_matches(arg, known_opts, n=1, cutoff=0.6)
                if close:
                    hint_lines.append(f"Hint: did you mean {close[0]}?")

        self.print_usage(sys.stderr)
        full = f"{self.prog}: error: {message}"
        if hint_lines:
            full += "\n" + "\n".join(hint_lines)
        self.exit(EXIT_CODES["config"], full + "\n")


def _setup_parser() -> argparse.ArgumentParser:
    """Define and return the CLI argument parser."""
    parser = HintingArgumentParser(
        prog=PROGRAM_SCRIPT,
        description=(
            "Prepare per-project TypeScript configs for checking a subset of "
            "files while respecting each file's tsconfig.json."
        ),
    )

    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Files, directories or glob patterns (quote globs).",
    )
    parser.add_argument(
        "-p",
        "--project",
        help="Path to tsconfig.json (default: nearest to each file).",
    )
    parser.add_argument(
        "--include",
        action="append",
        help="Extra files to add to every group (comma-separated, repeatable).",
    )

    # --- Discovery limits ---
    parser.add_argument("--max-depth", type=int, help="Import hops to follow.")
    parser.add_argument("--max-files", type=int, help="Files per group, inputs included.")
    parser.add_argument(
        "--no-recursive",
        dest="recursive",
        action="store_const",
        const=False,
        help="Do not follow imports (inputs, ambient and setup files only).",
    )

    # --- Compiler overrides ---
    lib_check = parser.add_mutually_exclusive_group()
    lib_check.add_argument(
        "--skip-lib-check",
        dest="skip_lib_check",
        action="store_const",
        const=True,
        help="Skip type checking of declaration files (default).",
    )
    lib_check.add_argument(
        "--no-skip-lib-check",
        dest="skip_lib_check",
        action="store_const",
        const=False,
        help="Type check declaration files too.",
    )

    # --- Cache ---
    cache = parser.add_mutually_exclusive_group()
    cache.add_argument(
        "--cache",
        dest="cache",
        action="store_const",
        const=True,
        help="Reuse synthesized configs between runs (default).",
    )
    cache.add_argument(
        "--no-cache",
        dest="cache",
        action="store_const",
        const=False,
        help=(
            "Write temporary configs; the config paths in the printed plan "
            "are removed before exit."
        ),
    )
    parser.add_argument("--cache-dir", help="Directory for synthesized configs.")
    parser.add_argument(
        "--clear-cache",
        action="store_true",
        help="Delete the cache directory before preparing.",
    )

    # --- Execution ---
    parser.add_argument(
        "-j", "--jobs", type=int, help="Prepare groups on this many threads."
    )
    parser.add_argument(
        "--timeout",
        dest="deadline",
        type=float,
        metavar="SECONDS",
        help="Abort preparation after this many seconds.",
    )
    parser.add_argument("--cwd", help=argparse.SUPPRESS)
    parser.add_argument(
        "--json", action="store_true", help="Print the plan as JSON on stdout."
    )

    # --- Version and verbosity ---
    parser.add_argument("--version", action="store_true", help="Show version info.")

    log_level = parser.add_mutually_exclusive_group()
    log_level.add_argument(
        "-q",
        "--quiet",
        action="store_const",
        const="warning",
        dest="log_level",
        help="Suppress non-critical output (same as --log-level warning).",
    )
    log_level.add_argument(
        "-v",
        "--verbose",
        action="store_const",
        const="debug",
        dest="log_level",
        help="Verbose output (same as --log-level debug).",
    )
    log_level.add_argument(
        "--log-level",
        choices=LOG_LEVEL_CHOICES,
        default=None,
        dest="log_level",
        help="Set log verbosity level.",
    )
    return parser


def _initialize_logger(args: argparse.Namespace) -> None:
    """Initialize logger with CLI args, env vars, and defaults."""
    logger = get_app_logger()
    level = logger.determineLogLevel(args=args)
    logger.setLevel(level)
    logger.trace(f"[BOOT] log-level initialized: {level}")

    logger.debug(
        "Runtime: Python %s (%s)",
        platform.python_version(),
        platform.python_implementation(),
    )


def _allows_js(locator: ConfigLocator, options: CheckOptions) -> bool:
    """Whether JS inputs are accepted, judged by the project (or cwd) config."""
    try:
        if options.project is not None:
            return locator.load(options.project).allows_js
        return locator.resolve(options.cwd).allows_js
    except ConfigNotFoundError:
        # Each input may still have its own config below cwd
        return False


# --------------------------------------------------------------------------- #
# Plan output
# --------------------------------------------------------------------------- #


def _artifact_state(item: PreparedGroup) -> str:
    if item.synthesized.cached:
        return "cached"
    if item.synthesized.temporary:
        return "temporary"
    return "written"


def plan_to_dict(prepared: list[PreparedGroup]) -> list[dict[str, Any]]:
    return [
        {
            "config": str(item.group.config.path),
            "synthesizedConfig": str(item.config_path),
            "fingerprint": item.synthesized.fingerprint,
            "state": _artifact_state(item),
            "inputs": [str(p) for p in item.group.files],
            "dependencies": [str(p) for p in item.group.dependencies],
            "notices": [
                {"kind": n.kind, "limit": n.limit, "message": n.message}
                for n in item.group.notices
            ],
        }
        for item in prepared
    ]


def format_plan(prepared: list[PreparedGroup], cwd: Path) -> str:
    lines: list[str] = []
    for item in prepared:
        group = item.group
        lines.append(shorten_path_for_display(group.config.path, cwd=cwd))
        lines.append(
            f"  {_artifact_state(item)}: "
            f"{shorten_path_for_display(item.config_path, cwd=cwd)}"
        )
        lines.append(
            f"  {len(group.files)} input(s), {len(group.dependencies)} dependencies"
        )
        lines.extend(f"  ! {notice.message}" for notice in group.notices)
    return "\n".join(lines)


def _run(args: argparse.Namespace) -> int:
    logger = get_app_logger()
    options = resolve_check_options(args)
    locator = ConfigLocator()

    if getattr(args, "clear_cache", False):
        config = (
            locator.load(options.project)
            if options.project is not None
            else locator.resolve(options.cwd)
        )
        with CachePool(options) as caches:
            caches.for_config(config).clear()
        logger.info(
            "Cleared cache %s",
            shorten_path_for_display(
                resolve_cache_dir(config.path, options.cache_dir), cwd=options.cwd
            ),
        )

    files = resolve_input_files(
        args.files, options.cwd, allow_js=_allows_js(locator, options)
    )
    if not files:
        logger.info("No TypeScript files to check")
        return EXIT_CODES["success"]

    with CachePool(options) as caches:
        prepared = prepare_check(files, options, caches, locator=locator)
        if args.json:
            print(json.dumps(plan_to_dict(prepared), indent=2))
        else:
            print(format_plan(prepared, options.cwd))
    return EXIT_CODES["success"]


def main(argv: list[str] | None = None) -> int:
    logger = get_app_logger()  # init (use env + defaults)

    try:
        parser = _setup_parser()
        args = parser.parse_args(argv)

        # --- Early runtime init (use CLI + env + defaults) ---
        _initialize_logger(args)

        if args.version:
            print(f"{PROGRAM_DISPLAY} {get_metadata().version}")
            return EXIT_CODES["success"]

        if not args.files:
            parser.error("no files specified")

        return _run(args)

    except (TscFilesError, OSError, ValueError) as e:
        # controlled termination
        logger.error(str(e))  # noqa: TRY400
        return exit_code_for(e)

    except Exception as e:
        # unexpected internal error
        logger.critical("Unexpected internal error: %s", e, exc_info=True)
        return exit_code_for(e)
