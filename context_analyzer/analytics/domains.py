"""
Domain inference — pure functions, pipeline pattern.

Each stage is an independent matcher: (name, file_path, matcher) -> str | None.
Stages run in DOMAIN_STAGES order and the first non-None answer wins;
nothing after it is evaluated.

To add a stage: write a function with the stage signature and insert it
into DOMAIN_STAGES at the precedence it should have.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import PurePosixPath

from ..config import AnalyzerConfig, compile_domain_patterns

UNKNOWN_DOMAIN = "unknown"

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_ALPHA_DIGIT    = re.compile(r"([A-Za-z])(\d)")
_DIGIT_ALPHA    = re.compile(r"(\d)([A-Za-z])")
_SEPARATORS     = re.compile(r"[_\-\s]+")


@dataclass(frozen=True)
class DomainMatcher:
    """Config prepared once per analysis: patterns compiled, keywords lowered."""
    patterns:        tuple[re.Pattern, ...] = ()
    keywords:        tuple[str, ...]        = ()
    path_domain_map: dict[str, str]         = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: AnalyzerConfig) -> "DomainMatcher":
        return cls(
            patterns=tuple(compile_domain_patterns(config)),
            keywords=tuple(k.lower() for k in config.domain_keywords if k),
            path_domain_map=dict(config.path_domain_map),
        )


def tokenize(name: str) -> list[str]:
    """
    Split an identifier into lower-cased tokens.

    Boundaries: lower→upper camel transitions, letter/digit transitions,
    underscores, hyphens and whitespace.
    """
    spaced = _CAMEL_BOUNDARY.sub(r"\1 \2", name)
    spaced = _ALPHA_DIGIT.sub(r"\1 \2", spaced)
    spaced = _DIGIT_ALPHA.sub(r"\1 \2", spaced)
    return [t.lower() for t in _SEPARATORS.split(spaced) if t]


# ── Stages ────────────────────────────────────────────────────────────────────

def _match_pattern(name: str, file_path: str, matcher: DomainMatcher) -> str | None:
    """Regex patterns against the raw name; the matched text is the domain."""
    for pattern in matcher.patterns:
        m = pattern.search(name)
        if m:
            label = m.group(0).strip().lower()
            if label:
                return label
    return None


def _match_keyword(name: str, file_path: str, matcher: DomainMatcher) -> str | None:
    """Keywords as whole tokens or substrings of tokens (abbreviations like txn)."""
    if not matcher.keywords:
        return None
    candidates = tokenize(name)
    candidates.append(name.lower())
    for keyword in matcher.keywords:
        if any(keyword == c or keyword in c for c in candidates):
            return keyword
    return None


def _match_path(name: str, file_path: str, matcher: DomainMatcher) -> str | None:
    """Nearest directory segment present in path_domain_map."""
    if not matcher.path_domain_map:
        return None
    parts = PurePosixPath(file_path.replace("\\", "/")).parts[:-1]
    for segment in reversed(parts):
        if segment in matcher.path_domain_map:
            return matcher.path_domain_map[segment]
        lowered = segment.lower()
        if lowered in matcher.path_domain_map:
            return matcher.path_domain_map[lowered]
    return None


DOMAIN_STAGES = [
    _match_pattern,
    _match_keyword,
    _match_path,
]


def infer_domain(
    name: str,
    file_path: str,
    matcher: DomainMatcher | AnalyzerConfig,
) -> str:
    """
    Run DOMAIN_STAGES in order; first hit wins, else "unknown".

    A raw AnalyzerConfig is accepted for one-off calls; batch callers should
    build the DomainMatcher once so patterns are compiled a single time.
    """
    if isinstance(matcher, AnalyzerConfig):
        matcher = DomainMatcher.from_config(matcher)
    for stage in DOMAIN_STAGES:
        domain = stage(name, file_path, matcher)
        if domain is not None:
            return domain
    return UNKNOWN_DOMAIN
