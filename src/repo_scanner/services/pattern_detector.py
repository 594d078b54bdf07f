"""Pattern detector — shallow regex heuristics over raw file text.

This is not a linter: nothing is parsed.  Each check contributes at most one
message per file.  All regex patterns are pre-compiled.
"""

from __future__ import annotations

import re

# ── Compiled patterns ───────────────────────────────────────────────────────

# Counted checks, applied to every file in this order.
_GENERIC_CHECKS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"console\.error\s*\("), "Console error found"),
    (re.compile(r"throw new Error"), "Uncaught throw statement"),
    (re.compile(r"TODO:|FIXME:|XXX:|HACK:", re.IGNORECASE), "TODO/FIXME comment found"),
    (re.compile(r"debugger;"), "Debugger statement found"),
    (
        re.compile(r"process\.env\.[A-Z_]+\b(?!\s*\|\||\s*\?\?)"),
        "Unguarded env variable access",
    ),
]

_JS_TS_PATH = re.compile(r"\.(?:ts|tsx|js|jsx)$")

_JS_TS_CHECKS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r":\s*any\b"), "'any' type usage detected"),
    (re.compile(r"\bvar\s+\w+"), "'var' usage (consider let/const)"),
    (re.compile(r"[^=!]==[^=]"), "Loose equality (==) used instead of strict (===)"),
]

_PYTHON_CHECKS: list[tuple[re.Pattern[str], str]] = [
    (
        re.compile(r"except:\s*$", re.MULTILINE),
        "Bare except clause (catches all exceptions)",
    ),
    (re.compile(r"import \*"), "Wildcard import detected"),
]


# ── Public API ──────────────────────────────────────────────────────────────


def detect(path: str, content: str) -> list[str]:
    """Return ``"<path>: <message>"`` strings for every check that matched.

    Language-specific checks come first and report presence only; the
    generic checks follow and report how many matches were found.
    """
    issues: list[str] = []

    specific: list[tuple[re.Pattern[str], str]] = []
    if _JS_TS_PATH.search(path):
        specific = _JS_TS_CHECKS
    elif path.endswith(".py"):
        specific = _PYTHON_CHECKS

    for pattern, message in specific:
        if pattern.search(content):
            issues.append(f"{path}: {message}")

    for pattern, message in _GENERIC_CHECKS:
        count = sum(1 for _ in pattern.finditer(content))
        if count:
            plural = "s" if count > 1 else ""
            issues.append(f"{path}: {message} ({count} occurrence{plural})")

    return issues
