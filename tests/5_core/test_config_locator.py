# tests/5_core/test_config_locator.py

import json
from pathlib import Path

import pytest

import tsc_files.config as mod_config
import tsc_files.errors as mod_errors
from tests.utils import write_file, write_tsconfig


def test_resolve_walks_up_to_nearest_config(tmp_path: Path) -> None:
    """The closest tsconfig.json above the start directory is the origin."""
    # --- setup ---
    root = tmp_path.resolve()
    write_tsconfig(root, {"compilerOptions": {"strict": True}})
    inner = write_tsconfig(root / "packages/app", {"compilerOptions": {"jsx": "react"}})
    deep = root / "packages/app/src/components"
    deep.mkdir(parents=True)

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(deep)

    # --- verify ---
    assert config.path == inner
    assert config.compiler_options == {"jsx": "react"}


def test_resolve_raises_when_no_config_up_to_root(tmp_path: Path) -> None:
    """No tsconfig.json anywhere above should be a ConfigNotFoundError."""
    # --- setup ---
    start = tmp_path / "empty"
    start.mkdir()

    # --- execute and verify ---
    with pytest.raises(mod_errors.ConfigNotFoundError, match="--project") as excinfo:
        mod_config.ConfigLocator().resolve(start)
    assert excinfo.value.code == 2  # noqa: PLR2004


def test_resolve_accepts_jsonc(tmp_path: Path) -> None:
    """Comments and trailing commas are valid in tsconfig.json."""
    # --- setup ---
    write_tsconfig(
        tmp_path,
        text='{\n  // strict mode\n  "compilerOptions": {"strict": true,},\n}\n',
    )

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(tmp_path)

    # --- verify ---
    assert config.compiler_options["strict"] is True


def test_read_tsconfig_keeps_comment_markers_inside_strings(tmp_path: Path) -> None:
    """Glob and URL strings survive comment stripping."""
    # --- setup ---
    path = write_tsconfig(
        tmp_path,
        text=(
            "{\n"
            '  "include": ["src/**/*"], // sources\n'
            '  "compilerOptions": {"baseUrl": "./", "types": ["http://x/y",]},\n'
            "}\n"
        ),
    )

    # --- execute ---
    raw = mod_config.read_tsconfig(path)

    # --- verify ---
    assert raw["include"] == ["src/**/*"]
    assert raw["compilerOptions"]["types"] == ["http://x/y"]


def test_invalid_json_raises_parse_error(tmp_path: Path) -> None:
    """A malformed config names the file and suggests --project."""
    # --- setup ---
    path = write_tsconfig(tmp_path, text='{"compilerOptions": {')

    # --- execute and verify ---
    with pytest.raises(mod_errors.ConfigParseError) as excinfo:
        mod_config.ConfigLocator().resolve(tmp_path)
    assert excinfo.value.path == path.resolve()
    assert "--project" in str(excinfo.value)


def test_non_object_root_raises_parse_error(tmp_path: Path) -> None:
    """A top-level array is not a tsconfig."""
    # --- setup ---
    write_tsconfig(tmp_path, text="[]")

    # --- execute and verify ---
    with pytest.raises(mod_errors.ConfigParseError, match="object"):
        mod_config.ConfigLocator().resolve(tmp_path)


def test_empty_config_is_treated_as_empty_object(tmp_path: Path) -> None:
    """An empty tsconfig.json behaves like {}."""
    # --- setup ---
    write_tsconfig(tmp_path, text="")

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(tmp_path)

    # --- verify ---
    assert config.compiler_options == {}
    assert config.include is None


def test_relative_extends_without_json_suffix(tmp_path: Path) -> None:
    """'./base' resolves to base.json next to the referencing config."""
    # --- setup ---
    root = tmp_path.resolve()
    base = write_tsconfig(
        root, {"compilerOptions": {"strict": True, "target": "ES2020"}}, name="base.json"
    )
    origin = write_tsconfig(
        root, {"extends": "./base", "compilerOptions": {"target": "ES2022"}}
    )

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root)

    # --- verify ---
    assert config.chain == (base, origin)
    assert config.compiler_options == {"strict": True, "target": "ES2022"}


def test_extends_directory_uses_its_tsconfig(tmp_path: Path) -> None:
    """An extends entry naming a directory means <dir>/tsconfig.json."""
    # --- setup ---
    root = tmp_path.resolve()
    shared = write_tsconfig(root / "shared", {"compilerOptions": {"noImplicitAny": True}})
    write_tsconfig(root / "app", {"extends": "../shared"})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root / "app")

    # --- verify ---
    assert config.chain[0] == shared
    assert config.compiler_options["noImplicitAny"] is True


def test_package_extends_resolves_through_node_modules(tmp_path: Path) -> None:
    """Package-style extends are looked up in node_modules walking upwards."""
    # --- setup ---
    root = tmp_path.resolve()
    pkg = root / "node_modules/@tsconfig/node18"
    write_tsconfig(pkg, {"compilerOptions": {"module": "node16"}})
    write_tsconfig(root / "packages/api", {"extends": "@tsconfig/node18"})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root / "packages/api")

    # --- verify ---
    assert config.chain[0] == pkg / "tsconfig.json"
    assert config.compiler_options["module"] == "node16"


def test_package_extends_honours_package_json_tsconfig_field(tmp_path: Path) -> None:
    """A package's package.json 'tsconfig' field picks its config file."""
    # --- setup ---
    root = tmp_path.resolve()
    pkg = root / "node_modules/my-config"
    write_file(pkg / "package.json", json.dumps({"tsconfig": "./strict.json"}))
    strict = write_tsconfig(pkg, {"compilerOptions": {"strict": True}}, name="strict.json")
    write_tsconfig(root, {"extends": "my-config"})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root)

    # --- verify ---
    assert config.chain[0] == strict


def test_package_subpath_extends(tmp_path: Path) -> None:
    """'pkg/tsconfig.base' resolves to a file inside the package."""
    # --- setup ---
    root = tmp_path.resolve()
    base = write_tsconfig(
        root / "node_modules/pkg", {"compilerOptions": {"lib": ["ES2022"]}},
        name="tsconfig.base.json",
    )
    write_tsconfig(root, {"extends": "pkg/tsconfig.base"})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root)

    # --- verify ---
    assert config.chain[0] == base


def test_array_extends_later_entries_override(tmp_path: Path) -> None:
    """With an extends array, later entries win over earlier ones."""
    # --- setup ---
    root = tmp_path.resolve()
    write_tsconfig(root, {"compilerOptions": {"target": "ES5"}}, name="a.json")
    write_tsconfig(root, {"compilerOptions": {"target": "ES2022"}}, name="b.json")
    write_tsconfig(root, {"extends": ["./a.json", "./b.json"]})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root)

    # --- verify ---
    assert [p.name for p in config.chain] == ["a.json", "b.json", "tsconfig.json"]
    assert config.compiler_options["target"] == "ES2022"


def test_extends_cycle_raises(tmp_path: Path) -> None:
    """A config chain that loops back on itself is a ConfigExtendsError."""
    # --- setup ---
    write_tsconfig(tmp_path, {"extends": "./other.json"})
    write_tsconfig(tmp_path, {"extends": "./tsconfig.json"}, name="other.json")

    # --- execute and verify ---
    with pytest.raises(mod_errors.ConfigExtendsError, match="circular"):
        mod_config.ConfigLocator().resolve(tmp_path)


def test_unresolvable_extends_raises(tmp_path: Path) -> None:
    """A missing extends target is reported with the referencing file."""
    # --- setup ---
    path = write_tsconfig(tmp_path, {"extends": "@missing/config"})

    # --- execute and verify ---
    with pytest.raises(mod_errors.ConfigExtendsError, match="@missing/config") as exc:
        mod_config.ConfigLocator().resolve(tmp_path)
    assert exc.value.path == path.resolve()


def test_extends_with_wrong_type_raises(tmp_path: Path) -> None:
    """extends must be a string or a list of strings."""
    # --- setup ---
    write_tsconfig(tmp_path, {"extends": 42})

    # --- execute and verify ---
    with pytest.raises(mod_errors.ConfigExtendsError):
        mod_config.ConfigLocator().resolve(tmp_path)


def test_merge_concatenates_lists_and_replaces_objects(tmp_path: Path) -> None:
    """List options concatenate base-first; object options are replaced."""
    # --- setup ---
    root = tmp_path.resolve()
    write_tsconfig(
        root,
        {
            "compilerOptions": {
                "lib": ["ES2022", "DOM"],
                "paths": {"@base/*": ["base/*"], "@shared/*": ["shared/*"]},
            }
        },
        name="base.json",
    )
    write_tsconfig(
        root,
        {
            "extends": "./base.json",
            "compilerOptions": {
                "lib": ["DOM", "DOM.Iterable"],
                "paths": {"@app/*": ["app/*"]},
            },
        },
    )

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root)

    # --- verify ---
    assert config.compiler_options["lib"] == ["ES2022", "DOM", "DOM.Iterable"]
    assert config.paths == {"@app/*": ["app/*"]}


def test_include_is_inherited_relative_to_declaring_config(tmp_path: Path) -> None:
    """Inherited include/exclude stay relative to the config that set them."""
    # --- setup ---
    root = tmp_path.resolve()
    write_tsconfig(root / "configs", {"include": ["src"], "exclude": ["dist"]}, name="base.json")
    write_tsconfig(root / "app", {"extends": "../configs/base.json"})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root / "app")

    # --- verify ---
    assert config.include == ["src"]
    assert config.exclude == ["dist"]
    assert config.files_root == root / "configs"


def test_include_in_leaf_replaces_inherited_include(tmp_path: Path) -> None:
    """Top-level include is replaced, never concatenated."""
    # --- setup ---
    root = tmp_path.resolve()
    write_tsconfig(root, {"include": ["src"]}, name="base.json")
    write_tsconfig(root, {"extends": "./base.json", "include": ["lib"]})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root)

    # --- verify ---
    assert config.include == ["lib"]
    assert config.files_root == root


def test_path_options_are_made_absolute_against_declaring_config(tmp_path: Path) -> None:
    """baseUrl and outDir resolve against the config that declared them."""
    # --- setup ---
    root = tmp_path.resolve()
    write_tsconfig(
        root / "configs",
        {"compilerOptions": {"baseUrl": "../src", "outDir": "../build"}},
        name="base.json",
    )
    write_tsconfig(root, {"extends": "./configs/base.json"})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root)

    # --- verify ---
    assert config.base_url == root / "src"
    assert config.out_dir == root / "build"
    assert config.paths_root == root / "src"


def test_paths_root_defaults_to_declaring_config_dir(tmp_path: Path) -> None:
    """Without baseUrl, paths targets are relative to the config defining paths."""
    # --- setup ---
    root = tmp_path.resolve()
    write_tsconfig(
        root / "configs",
        {"compilerOptions": {"paths": {"@/*": ["../src/*"]}}},
        name="base.json",
    )
    write_tsconfig(root, {"extends": "./configs/base.json"})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(root)

    # --- verify ---
    assert config.paths_root == root / "configs"


def test_locator_memoises_results(tmp_path: Path) -> None:
    """Repeated lookups reuse the cached EffectiveConfig."""
    # --- setup ---
    write_tsconfig(tmp_path, {})
    (tmp_path / "src").mkdir()
    cache = mod_config.ConfigCache()
    locator = mod_config.ConfigLocator(cache)

    # --- execute ---
    first = locator.resolve(tmp_path / "src")
    second = locator.resolve(tmp_path)

    # --- verify ---
    assert first is second
    assert len(cache.configs) == 1


def test_load_explicit_missing_config(tmp_path: Path) -> None:
    """An explicit --project path that does not exist is reported as such."""
    # --- execute and verify ---
    with pytest.raises(mod_errors.ConfigNotFoundError, match="not found"):
        mod_config.ConfigLocator().load(tmp_path / "tsconfig.build.json")


def test_load_explicit_directory(tmp_path: Path) -> None:
    """An explicit directory means its tsconfig.json."""
    # --- setup ---
    path = write_tsconfig(tmp_path, {"compilerOptions": {"strict": True}})

    # --- execute ---
    config = mod_config.ConfigLocator().load(tmp_path)

    # --- verify ---
    assert config.path == path.resolve()


def test_default_include_and_exclude_patterns(tmp_path: Path) -> None:
    """Unset include means everything; unset exclude means the compiler defaults."""
    # --- setup ---
    write_tsconfig(tmp_path, {"compilerOptions": {"outDir": "out"}})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(tmp_path)

    # --- verify ---
    assert config.include_patterns == ["**/*"]
    assert "node_modules" in config.exclude_patterns
    assert str(tmp_path.resolve() / "out") in config.exclude_patterns


def test_files_only_config_has_no_implicit_include(tmp_path: Path) -> None:
    """A config listing only 'files' includes nothing else by glob."""
    # --- setup ---
    write_tsconfig(tmp_path, {"files": ["main.ts"]})

    # --- execute ---
    config = mod_config.ConfigLocator().resolve(tmp_path)

    # --- verify ---
    assert config.include_patterns == []
