# src/tsc_files/discovery/scanner.py
"""Static import scanning for TypeScript/JavaScript sources.

This is a lossy regex scan over comment-stripped text, not a parser. The
compiler does the authoritative resolution; we only need a good superset
of the local files it will want.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from tsc_files.logs import get_app_logger


SpecifierKind = Literal["import", "reference"]


@dataclass(frozen=True)
class Specifier:
    value: str
    kind: SpecifierKind = "import"


ANY_IMPORT_EXPORT_FROM_RE = re.compile(
    r"""(?mx)
    ^\s*
    (?:import|export)\s+
    (?:type\s+)?                 # "import type ..." / "export type ..."
    [\w\s{},*$]*?                # bindings (may be multiline)
    \bfrom\s*
    ["'](?P<spec>[^"'\n]+)["']
    """
)

IMPORT_SIDE_EFFECT_RE = re.compile(
    r"""(?mx)
    ^\s*import\s*["'](?P<spec>[^"'\n]+)["']
    """
)

DYNAMIC_IMPORT_RE = re.compile(
    r"""\bimport\s*\(\s*["'](?P<spec>[^"'\n]+)["']\s*[,)]"""
)
REQUIRE_RE = re.compile(r"""\brequire\s*\(\s*["'](?P<spec>[^"'\n]+)["']\s*\)""")

IMPORT_ASSIGN_REQUIRE_RE = re.compile(
    r"""(?mx)
    ^\s*(?:export\s+)?import\s+[A-Za-z_\$][\w\$]*\s*=\s*
    require\s*\(\s*["'](?P<spec>[^"'\n]+)["']\s*\)
    """
)

# Triple-slash directives live in comments, so match on the raw text.
REFERENCE_PATH_RE = re.compile(
    r"""(?m)^\s*///\s*<reference\s+path\s*=\s*["'](?P<spec>[^"'\n]+)["']"""
)

_IMPORT_PATTERNS = (
    ANY_IMPORT_EXPORT_FROM_RE,
    IMPORT_SIDE_EFFECT_RE,
    DYNAMIC_IMPORT_RE,
    REQUIRE_RE,
    IMPORT_ASSIGN_REQUIRE_RE,
)


def strip_comments(text: str) -> str:  # noqa: C901, PLR0912, PLR0915
    """
    Remove // and /* */ comments while preserving newlines and string contents.
    Newlines are kept so ``^`` anchors and offsets stay stable.
    """
    out: list[str] = []
    i = 0
    n = len(text)

    in_line = False
    in_block = False
    quote = ""
    esc = False

    while i < n:
        c = text[i]
        nxt = text[i + 1] if i + 1 < n else ""

        if in_line:
            if c == "\n":
                in_line = False
                out.append("\n")
            else:
                out.append(" ")
            i += 1
            continue

        if in_block:
            if c == "*" and nxt == "/":
                in_block = False
                out.append("  ")
                i += 2
            else:
                out.append("\n" if c == "\n" else " ")
                i += 1
            continue

        # strings (single, double, template)
        if quote:
            out.append(c)
            if esc:
                esc = False
            elif c == "\\":
                esc = True
            elif c == quote:
                quote = ""
            i += 1
            continue

        # comment starts (only when not in a string)
        if c == "/" and nxt == "/":
            in_line = True
            out.append("  ")
            i += 2
            continue

        if c == "/" and nxt == "*":
            in_block = True
            out.append("  ")
            i += 2
            continue

        if c in "'\"`":
            quote = c

        out.append(c)
        i += 1

    return "".join(out)


def scan_specifiers(text: str) -> list[Specifier]:
    """Module specifiers referenced by ``text``, in source order, de-duplicated."""
    found: list[tuple[int, Specifier]] = [
        (m.start(), Specifier(m.group("spec"), "reference"))
        for m in REFERENCE_PATH_RE.finditer(text)
    ]

    code = strip_comments(text)
    for pattern in _IMPORT_PATTERNS:
        found.extend(
            (m.start("spec"), Specifier(m.group("spec").strip()))
            for m in pattern.finditer(code)
        )

    found.sort(key=lambda item: item[0])
    seen: set[Specifier] = set()
    result: list[Specifier] = []
    for _, spec in found:
        if spec.value and spec not in seen:
            seen.add(spec)
            result.append(spec)
    return result


def scan_file(path: Path) -> list[Specifier]:
    """Read ``path`` and scan it. Read errors propagate."""
    text = path.read_text(encoding="utf-8", errors="replace")
    specifiers = scan_specifiers(text)
    get_app_logger().trace(f"[scan_file] {path.name}: {len(specifiers)} specifier(s)")
    return specifiers
