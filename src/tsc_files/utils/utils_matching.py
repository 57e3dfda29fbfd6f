# src/tsc_files/utils/utils_matching.py


import re
from functools import lru_cache
from pathlib import Path

from tsc_files.logs import get_app_logger


_GLOB_CHARS = frozenset("*?[{")


def has_glob_chars(pattern: str) -> bool:
    return any(ch in _GLOB_CHARS for ch in pattern)


@lru_cache(maxsize=512)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    """
    Compile a tsconfig-style glob to a regex.
    '*' and '?' never cross '/', '**/' matches zero or more directories and a
    trailing '**' matches everything below. Always case-sensitive.
    """

    def _escape_lit(ch: str) -> str:
        # Escape regex metacharacters
        if ch in ".^$+{}[]|()\\":
            return "\\" + ch
        return ch

    i = 0
    n = len(pattern)
    pieces: list[str] = []
    while i < n:
        ch = pattern[i]

        # Character class: copy through closing ']'
        if ch == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            # allow leading ']' inside class as a literal
            if j < n and pattern[j] == "]":
                j += 1
            while j < n and pattern[j] != "]":
                j += 1
            if j < n and pattern[j] == "]":
                body = pattern[i + 1 : j]
                if body.startswith("!"):
                    body = "^" + body[1:]
                pieces.append(f"[{body}]")
                i = j + 1
            else:
                # unmatched '[', treat literally
                pieces.append("\\[")
                i += 1
            continue

        # Recursive glob
        if ch == "*" and i + 1 < n and pattern[i + 1] == "*":
            k = i + 2
            while k < n and pattern[k] == "*":
                k += 1
            if k < n and pattern[k] == "/":
                pieces.append("(?:.*/)?")
                k += 1
            else:
                pieces.append(".*")
            i = k
            continue

        # Single-segment glob
        if ch == "*":
            pieces.append("[^/]*")
            i += 1
            continue

        if ch == "?":
            pieces.append("[^/]")
            i += 1
            continue

        pieces.append(_escape_lit(ch))
        i += 1

    inner = "".join(pieces)
    return re.compile(f"(?s:{inner})\\Z")


def match_path_glob(path: str, pattern: str) -> bool:
    """Match a posix relative path against a tsconfig-style glob."""
    return bool(_compile_glob(pattern).match(path))


def _matches_exclude(rel: str, pattern: str) -> bool:
    # A plain (non-glob) exclude names a file or a whole directory tree.
    if not has_glob_chars(pattern):
        return rel == pattern or rel.startswith(pattern + "/")

    if match_path_glob(rel, pattern):
        return True
    # A glob naming a directory excludes everything below it
    parts = rel.split("/")
    return any(
        match_path_glob("/".join(parts[:i]), pattern) for i in range(1, len(parts))
    )


def normalize_pattern(pattern: str, root: Path) -> str | None:
    """Posix form of ``pattern`` relative to ``root``.

    Absolute patterns outside ``root`` give None.
    """
    pat = pattern.replace("\\", "/")
    if Path(pat).is_absolute():
        try:
            pat = Path(pat).relative_to(root).as_posix()
        except ValueError:
            return None
    while pat.startswith("./"):
        pat = pat[2:]
    return pat.rstrip("/")


def is_excluded_raw(
    path: Path | str,
    exclude_patterns: list[str],
    root: Path | str,
) -> bool:
    """Check ``path`` against tsconfig-style exclude patterns.

    - Treats 'path' as relative to 'root' unless already absolute.
    - Patterns are relative to 'root'; absolute patterns under 'root' are
      rewritten to relative form.
    - Paths outside 'root' are never excluded.
    """
    logger = get_app_logger()
    root = Path(root)
    path = Path(path)

    if not exclude_patterns:
        return False

    full_path = path if path.is_absolute() else (root / path)

    try:
        rel = full_path.relative_to(root).as_posix()
    except ValueError:
        # Path lies outside the root; skip matching
        return False

    for pattern in exclude_patterns:
        pat = normalize_pattern(pattern, root)
        if not pat:
            continue
        if _matches_exclude(rel, pat):
            logger.trace(f"[is_excluded_raw] {rel} MATCHED pattern {pattern!r}")
            return True

    return False


_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives (nested groups expand left to right)."""
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    result: list[str] = []
    for option in match.group(1).split(","):
        for expanded in expand_braces(head + option + tail):
            if expanded not in result:
                result.append(expanded)
    return result
