# src/tsc_files/constants.py
"""Central constants used across the project."""


# --- env keys ---
DEFAULT_ENV_LOG_LEVEL: str = "LOG_LEVEL"
DEFAULT_ENV_MAX_DEPTH: str = "MAX_DEPTH"
DEFAULT_ENV_MAX_FILES: str = "MAX_FILES"
DEFAULT_ENV_CACHE_DIR: str = "CACHE_DIR"
DEFAULT_ENV_NO_CACHE: str = "NO_CACHE"

# --- program defaults ---
DEFAULT_LOG_LEVEL: str = "info"

# --- check defaults ---
DEFAULT_MAX_DEPTH: int = 20
DEFAULT_MAX_FILES: int = 100
DEFAULT_RECURSIVE: bool = True
DEFAULT_USE_CACHE: bool = True
DEFAULT_SKIP_LIB_CHECK: bool = True
DEFAULT_NO_EMIT: bool = True
DEFAULT_JOBS: int = 1

# --- cache layout ---
# relative to the dependency-installation root (node_modules)
CACHE_SUBDIR: tuple[str, ...] = (".cache", "tsc-files")
DEPS_DIR_NAME: str = "node_modules"
SYNTH_CONFIG_PREFIX: str = "tsconfig."
SYNTH_CONFIG_SUFFIX: str = ".json"
BUILD_INFO_SUFFIX: str = ".tsbuildinfo"
# hex chars of the fingerprint embedded in artifact names
FINGERPRINT_NAME_LENGTH: int = 32

# --- compiler conventions ---
CONFIG_FILE_NAME: str = "tsconfig.json"

TS_EXTENSIONS: tuple[str, ...] = (".ts", ".tsx", ".mts", ".cts")
JS_EXTENSIONS: tuple[str, ...] = (".js", ".jsx", ".mjs", ".cjs")
DECLARATION_SUFFIXES: tuple[str, ...] = (".d.ts", ".d.mts", ".d.cts")
GENERATED_SUFFIX: str = ".gen.ts"
# files picked up by include globs without being imported
AMBIENT_SUFFIXES: tuple[str, ...] = (*DECLARATION_SUFFIXES, GENERATED_SUFFIX)

# Probe order for extensionless specifiers
TS_PROBE_SUFFIXES: tuple[str, ...] = (
    ".ts",
    ".tsx",
    ".d.ts",
    ".mts",
    ".d.mts",
    ".cts",
    ".d.cts",
    GENERATED_SUFFIX,
)
JS_PROBE_SUFFIXES: tuple[str, ...] = JS_EXTENSIONS

# JS-flavoured specifiers that may point at a TypeScript source
JS_TO_TS_SUFFIXES: dict[str, tuple[str, ...]] = {
    ".js": (".ts", ".tsx", ".d.ts"),
    ".jsx": (".tsx", ".d.ts"),
    ".mjs": (".mts", ".d.mts"),
    ".cjs": (".cts", ".d.cts"),
}

# tsc's default exclude list when a config sets none
DEFAULT_EXCLUDES: tuple[str, ...] = (
    "node_modules",
    "bower_components",
    "jspm_packages",
)
# never treated as inputs by the file resolver
INPUT_IGNORE_DIRS: tuple[str, ...] = ("node_modules", "dist")

DEFAULT_INCLUDE: tuple[str, ...] = ("**/*",)

# --- setup-file discovery ---
TEST_DIR_MARKERS: tuple[str, ...] = ("tests", "test", "__tests__", "spec")
TEST_FRAMEWORK_CONFIGS: tuple[str, ...] = (
    "vitest.config.ts",
    "vitest.config.js",
    "vitest.config.mjs",
    "jest.config.ts",
    "jest.config.js",
    "jest.config.mjs",
    "vite.config.ts",
    "vite.config.js",
    "vite.config.mjs",
)
SETUP_TEST_DIRS: tuple[str, ...] = (
    "tests",
    "src/tests",
    "__tests__",
    "test",
    "src/test",
    "spec",
    "src/spec",
)
SETUP_SUB_DIRS: tuple[str, ...] = ("config", "helpers", "utils")
SETUP_FILE_NAMES: tuple[str, ...] = (
    "setup.ts",
    "setup.js",
    "setupTests.ts",
    "setupTests.js",
    "setup-tests.ts",
    "setup-tests.js",
    "setup_tests.ts",
    "setup_tests.js",
    "test-setup.ts",
    "test-setup.js",
    "testSetup.ts",
    "testSetup.js",
    "globals.ts",
    "globals.js",
    "test-globals.ts",
    "test-globals.js",
    "testGlobals.ts",
    "testGlobals.js",
)

# --- logging ---
LOG_LEVEL_CHOICES: tuple[str, ...] = (
    "trace",
    "debug",
    "info",
    "warning",
    "error",
    "critical",
    "silent",
)
