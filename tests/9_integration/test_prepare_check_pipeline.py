# tests/9_integration/test_prepare_check_pipeline.py
"""End-to-end preparation across a multi-project workspace."""

import json
import tempfile
from pathlib import Path

import pytest

import tsc_files.cache as mod_cache
import tsc_files.checker as mod_checker
import tsc_files.config as mod_config
import tsc_files.discovery as mod_discovery
import tsc_files.errors as mod_errors
from tests.utils import write_file, write_tsconfig


def _workspace(root: Path) -> Path:
    """Two packages with different settings sharing one node_modules."""
    (root / "node_modules").mkdir(parents=True)
    write_tsconfig(root, {"compilerOptions": {"strict": True}})
    write_tsconfig(
        root / "packages/web",
        {
            "extends": "../../tsconfig.json",
            "compilerOptions": {
                "jsx": "react-jsx",
                "baseUrl": ".",
                "paths": {"@/*": ["src/*"]},
            },
        },
    )
    write_file(
        root / "packages/web/src/app.tsx",
        'import { Button } from "@/ui/button";\nexport const App = Button;\n',
    )
    write_file(root / "packages/web/src/ui/button.tsx", "export const Button = 1;\n")
    write_file(root / "packages/web/src/env.d.ts", "declare const API: string;\n")

    write_tsconfig(root / "packages/api", {"compilerOptions": {"module": "nodenext"}})
    write_file(root / "packages/api/src/server.ts", 'import "./routes.js";\n')
    write_file(root / "packages/api/src/routes.ts", "")
    return root


def test_groups_are_prepared_per_project(tmp_path: Path) -> None:
    """Each input is checked against its own config with its own dependencies."""
    # --- setup ---
    root = _workspace(tmp_path.resolve())
    web_app = root / "packages/web/src/app.tsx"
    api_server = root / "packages/api/src/server.ts"
    options = mod_config.CheckOptions(cwd=root)

    # --- execute ---
    with mod_cache.CachePool(options) as caches:
        prepared = mod_checker.prepare_check([web_app, api_server], options, caches)
        contents = [
            json.loads(item.config_path.read_text(encoding="utf-8"))
            for item in prepared
        ]

    # --- verify ---
    web, api = prepared
    assert web.group.config.path == root / "packages/web/tsconfig.json"
    assert web.files == [
        web_app,
        root / "packages/web/src/ui/button.tsx",
        root / "packages/web/src/env.d.ts",
    ]
    assert api.group.config.path == root / "packages/api/tsconfig.json"
    assert api.files == [api_server, root / "packages/api/src/routes.ts"]

    cache_dir = root / "node_modules/.cache/tsc-files"
    assert web.config_path.parent == cache_dir
    assert api.config_path.parent == cache_dir
    assert contents[0]["extends"] == str(root / "packages/web/tsconfig.json")
    assert contents[1]["extends"] == str(root / "packages/api/tsconfig.json")


def test_parallel_preparation_matches_sequential(tmp_path: Path) -> None:
    """jobs > 1 produces the same groups, in the same order."""
    # --- setup ---
    root = _workspace(tmp_path.resolve())
    inputs = [root / "packages/web/src/app.tsx", root / "packages/api/src/server.ts"]

    # --- execute ---
    results = []
    for jobs in (1, 2):
        options = mod_config.CheckOptions(cwd=root, jobs=jobs, cache=False)
        with mod_cache.CachePool(options) as caches:
            prepared = mod_checker.prepare_check(inputs, options, caches)
        results.append(
            [(p.group.config.path, p.files, p.synthesized.fingerprint) for p in prepared]
        )

    # --- verify ---
    assert results[0] == results[1]


def test_project_override_uses_one_group(tmp_path: Path) -> None:
    """--project puts every input under the given config."""
    # --- setup ---
    root = _workspace(tmp_path.resolve())
    inputs = [root / "packages/web/src/ui/button.tsx", root / "packages/api/src/routes.ts"]
    options = mod_config.CheckOptions(cwd=root, project=root / "tsconfig.json")

    # --- execute ---
    with mod_cache.CachePool(options) as caches:
        prepared = mod_checker.prepare_check(inputs, options, caches)

    # --- verify ---
    assert len(prepared) == 1
    assert prepared[0].group.config.path == root / "tsconfig.json"
    assert prepared[0].group.files == inputs


def test_second_run_reuses_cached_configs(tmp_path: Path) -> None:
    """Unchanged inputs map to the same cached artifact on the next run."""
    # --- setup ---
    root = _workspace(tmp_path.resolve())
    inputs = [root / "packages/api/src/server.ts"]
    options = mod_config.CheckOptions(cwd=root)

    # --- execute ---
    with mod_cache.CachePool(options) as caches:
        (first,) = mod_checker.prepare_check(inputs, options, caches)
    with mod_cache.CachePool(options) as caches:
        (second,) = mod_checker.prepare_check(inputs, options, caches)

    # --- verify ---
    assert not first.synthesized.cached
    assert second.synthesized.cached
    assert second.config_path == first.config_path


def test_cancelled_preparation_writes_nothing(tmp_path: Path) -> None:
    """A cancelled run raises before any artifact is written."""
    # --- setup ---
    root = _workspace(tmp_path.resolve())
    options = mod_config.CheckOptions(cwd=root)
    token = mod_discovery.CancelToken()
    token.cancel()

    # --- execute and verify ---
    with (
        mod_cache.CachePool(options) as caches,
        pytest.raises(mod_errors.CheckCancelledError),
    ):
        mod_checker.prepare_check(
            [root / "packages/api/src/server.ts"], options, caches, cancel=token
        )
    assert not (root / "node_modules/.cache/tsc-files").exists()


def test_missing_config_is_reported(tmp_path: Path) -> None:
    """A file with no governing tsconfig.json raises ConfigNotFoundError."""
    # --- setup ---
    orphan = write_file(tmp_path.resolve() / "orphan/a.ts")
    options = mod_config.CheckOptions(
        cwd=tmp_path, project=None, cache_dir=tmp_path / "cache"
    )

    # --- execute and verify ---
    with (
        mod_cache.CachePool(options) as caches,
        pytest.raises(mod_errors.ConfigNotFoundError),
    ):
        mod_checker.prepare_check([orphan], options, caches)


def test_uncached_run_without_node_modules_leaves_project_clean(tmp_path: Path) -> None:
    """A project with no node_modules never gains one from a --no-cache run."""
    # --- setup ---
    system_tmp = Path(tempfile.gettempdir())
    root = tmp_path.resolve() / "project"
    write_tsconfig(root, {})
    source = write_file(root / "src/a.ts")
    options = mod_config.CheckOptions(cwd=root, cache=False)

    # --- execute ---
    with mod_cache.CachePool(options) as caches:
        (prepared,) = mod_checker.prepare_check([source], options, caches)
        written = prepared.config_path
        assert written.is_file()

    # --- verify ---
    assert written.parent == system_tmp / "tsc-files"
    assert not written.exists()
    assert not (root / "node_modules").exists()
