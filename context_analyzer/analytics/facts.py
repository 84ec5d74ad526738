"""
Per-file fact extraction — pure functions only.

Pulls exported symbol names and import specifiers out of JS/TS source with
regular expressions, and estimates token cost and line count. No grammar
parsing happens here; the patterns cover the statically-declared forms.
"""
from __future__ import annotations

import math
import re

EXPORT_NAMED = re.compile(
    r"\bexport\s+(?:declare\s+)?(?:abstract\s+)?(?:async\s+)?"
    r"(?:function\*?|const|let|var|class|interface|type|enum)\s+([A-Za-z_$][\w$]*)"
)
EXPORT_DEFAULT = re.compile(
    r"\bexport\s+default\s+(?:async\s+)?(?:function\*?\s+|class\s+)?([A-Za-z_$][\w$]*)?"
)
EXPORT_LIST = re.compile(r"\bexport\s+(?:type\s+)?\{([^}]*)\}")

IMPORT_FROM = re.compile(r"""\bimport\s+(?:type\s+)?[^'";]*?\bfrom\s*['"]([^'"]+)['"]""")
IMPORT_SIDE_EFFECT = re.compile(r"""\bimport\s*['"]([^'"]+)['"]""")
EXPORT_FROM = re.compile(r"""\bexport\s+(?:type\s+)?(?:\*|\{[^}]*\})(?:\s+as\s+\w+)?\s*from\s*['"]([^'"]+)['"]""")
REQUIRE = re.compile(r"""\brequire\s*\(\s*['"]([^'"]+)['"]\s*\)""")

# Keywords that can follow `export default` without naming a symbol.
_DEFAULT_NON_NAMES = {"function", "class", "async", "new", "await", "typeof"}


def extract_exports(content: str) -> list[str]:
    """Exported symbol names in source order, deduplicated."""
    found: list[tuple[int, str]] = []

    for m in EXPORT_NAMED.finditer(content):
        found.append((m.start(), m.group(1)))

    for m in EXPORT_DEFAULT.finditer(content):
        name = m.group(1)
        if not name or name in _DEFAULT_NON_NAMES:
            name = "default"
        found.append((m.start(), name))

    for m in EXPORT_LIST.finditer(content):
        for part in m.group(1).split(","):
            part = part.strip()
            if part.startswith("type "):
                part = part[5:].strip()
            if " as " in part:
                part = part.split(" as ")[-1].strip()
            if part:
                found.append((m.start(), part))

    names: list[str] = []
    seen: set[str] = set()
    for _, name in sorted(found, key=lambda x: x[0]):
        if name not in seen:
            seen.add(name)
            names.append(name)
    return names


def extract_imports(content: str) -> list[str]:
    """Import specifiers in source order, deduplicated."""
    found: list[tuple[int, str]] = []
    for pattern in (IMPORT_FROM, IMPORT_SIDE_EFFECT, EXPORT_FROM, REQUIRE):
        for m in pattern.finditer(content):
            found.append((m.start(), m.group(1)))

    specs: list[str] = []
    seen: set[str] = set()
    for _, spec in sorted(found, key=lambda x: x[0]):
        if spec not in seen:
            seen.add(spec)
            specs.append(spec)
    return specs


def estimate_tokens(text: str) -> int:
    """~1 token per 4 characters of code."""
    return math.ceil(len(text) / 4)


def count_lines(text: str) -> int:
    if not text:
        return 0
    return text.count("\n") + 1
