# tests/5_core/test_file_resolver.py

from pathlib import Path

import tsc_files.file_resolver as mod_file_resolver
from tests.utils import write_file


def _layout(root: Path) -> Path:
    for rel in (
        "src/a.ts",
        "src/b.tsx",
        "src/c.js",
        "src/types.d.ts",
        "src/nested/helper.ts",
        "src/nested/e.mts",
        "node_modules/pkg/index.ts",
        "dist/out.ts",
        "README.md",
    ):
        write_file(root / rel)
    return root


def test_explicit_files_keep_argument_order(tmp_path: Path) -> None:
    """Plain file arguments resolve to absolute paths in the given order."""
    # --- setup ---
    root = _layout(tmp_path.resolve())

    # --- execute ---
    result = mod_file_resolver.resolve_input_files(
        ["src/b.tsx", "src/a.ts", "./src/a.ts"], root
    )

    # --- verify ---
    assert result == [root / "src/b.tsx", root / "src/a.ts"]


def test_directory_expands_to_sources(tmp_path: Path) -> None:
    """A directory yields its TypeScript files, never declarations."""
    # --- setup ---
    root = _layout(tmp_path.resolve())

    # --- execute ---
    result = mod_file_resolver.resolve_input_files(["src"], root)

    # --- verify ---
    assert result == [
        root / "src/a.ts",
        root / "src/b.tsx",
        root / "src/nested/e.mts",
        root / "src/nested/helper.ts",
    ]


def test_glob_patterns_and_braces(tmp_path: Path) -> None:
    """Globs expand relative to cwd and support brace alternatives."""
    # --- setup ---
    root = _layout(tmp_path.resolve())

    # --- execute ---
    star = mod_file_resolver.resolve_input_files(["src/*.ts"], root)
    deep = mod_file_resolver.resolve_input_files(["**/*.{ts,tsx}"], root)

    # --- verify ---
    assert star == [root / "src/a.ts"]
    assert deep == [root / "src/a.ts", root / "src/b.tsx", root / "src/nested/helper.ts"]


def test_javascript_needs_allow_js(tmp_path: Path) -> None:
    """JavaScript inputs are only accepted when the config allows them."""
    # --- setup ---
    root = _layout(tmp_path.resolve())

    # --- execute ---
    without = mod_file_resolver.resolve_input_files(["src/c.js"], root)
    with_js = mod_file_resolver.resolve_input_files(["src/c.js"], root, allow_js=True)

    # --- verify ---
    assert without == []
    assert with_js == [root / "src/c.js"]


def test_missing_and_unmatched_inputs_are_skipped(tmp_path: Path) -> None:
    """Missing files and empty globs are dropped without raising."""
    # --- setup ---
    root = _layout(tmp_path.resolve())

    # --- execute ---
    result = mod_file_resolver.resolve_input_files(
        ["nope.ts", "lib/**/*.ts", "README.md", "src/a.ts"], root
    )

    # --- verify ---
    assert result == [root / "src/a.ts"]
