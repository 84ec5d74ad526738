"""
Per-file issue classification — pure functions, rule-list pattern.

Each rule is an independent function: (metrics, config) -> Finding | None.
Findings are folded with a max-by-rank reducer, so a rule can raise a
file's severity to its own minimum but never lower it.

To add a rule: write a function matching the rule signature and append it
to ISSUE_RULES.
"""
from __future__ import annotations

import math
from typing import NamedTuple

from ..config import AnalyzerConfig

SEVERITIES = ("critical", "major", "minor", "info")

# Lower rank = more urgent; used for sorting results.
SEVERITY_RANK = {s: i for i, s in enumerate(SEVERITIES)}

NO_ISSUES        = "No significant issues detected"
NO_ISSUES_ACTION = "File is well-structured for AI context usage"


class Finding(NamedTuple):
    min_severity:     str
    issue:            str
    recommendation:   str
    savings_fraction: float


def escalate(current: str, minimum: str) -> str:
    """The more urgent of two severities."""
    return minimum if SEVERITY_RANK[minimum] < SEVERITY_RANK[current] else current


# ── Rules ─────────────────────────────────────────────────────────────────────
# metrics keys: import_depth, context_budget, cohesion_score,
#               fragmentation_score, circular_deps (cycles containing the file)


def _rule_circular(metrics: dict, config: AnalyzerConfig) -> Finding | None:
    n = len(metrics.get("circular_deps") or [])
    if not n:
        return None
    return Finding(
        "critical",
        f"Part of {n} circular dependency chain(s)",
        "Break circular dependencies by extracting interfaces or using dependency injection",
        0.2,
    )


def _rule_depth(metrics: dict, config: AnalyzerConfig) -> Finding | None:
    depth = metrics["import_depth"]
    if depth > config.max_depth * 1.5:
        return Finding(
            "critical",
            f"Import depth {depth} exceeds limit by 50%",
            "Flatten dependency tree or use facade pattern",
            0.3,
        )
    if depth > config.max_depth:
        return Finding(
            "major",
            f"Import depth {depth} exceeds recommended maximum {config.max_depth}",
            "Consider reducing dependency depth",
            0.15,
        )
    return None


def _rule_budget(metrics: dict, config: AnalyzerConfig) -> Finding | None:
    budget = metrics["context_budget"]
    if budget > config.max_context_budget * 1.5:
        return Finding(
            "critical",
            f"Context budget {budget:,} tokens is 50% over limit",
            "Split into smaller modules or reduce dependency tree",
            0.4,
        )
    if budget > config.max_context_budget:
        return Finding(
            "major",
            f"Context budget {budget:,} exceeds {config.max_context_budget:,}",
            "Reduce file size or dependencies",
            0.2,
        )
    return None


def _rule_cohesion(metrics: dict, config: AnalyzerConfig) -> Finding | None:
    score = metrics["cohesion_score"]
    if score < config.min_cohesion * 0.5:
        return Finding(
            "major",
            f"Very low cohesion ({score * 100:.0f}%) - mixed concerns",
            "Split file by domain - separate unrelated functionality",
            0.25,
        )
    if score < config.min_cohesion:
        return Finding(
            "minor",
            f"Low cohesion ({score * 100:.0f}%)",
            "Consider grouping related exports together",
            0.1,
        )
    return None


def _rule_fragmentation(metrics: dict, config: AnalyzerConfig) -> Finding | None:
    score = metrics["fragmentation_score"]
    if score > config.max_fragmentation:
        return Finding(
            "minor",
            f"High fragmentation ({score * 100:.0f}%) - scattered implementation",
            "Consolidate with related files in same domain",
            0.3,
        )
    return None


ISSUE_RULES = [
    _rule_circular,
    _rule_depth,
    _rule_budget,
    _rule_cohesion,
    _rule_fragmentation,
]


def classify(
    metrics: dict,
    config: AnalyzerConfig,
    cycles: list[list[str]] | None = None,
) -> dict:
    """
    Evaluate ISSUE_RULES for one file.

    metrics — per-file metric bundle (see rule comment above)
    cycles  — all cycles in the graph; when given, the ones containing
              metrics["file"] replace metrics["circular_deps"]
    Returns {severity, issues, recommendations, potential_savings}.
    """
    if cycles is not None:
        metrics = {**metrics, "circular_deps": [c for c in cycles if metrics["file"] in c]}

    severity = "info"
    issues: list[str] = []
    recommendations: list[str] = []
    fraction = 0.0

    for rule in ISSUE_RULES:
        finding = rule(metrics, config)
        if finding is None:
            continue
        severity = escalate(severity, finding.min_severity)
        issues.append(finding.issue)
        recommendations.append(finding.recommendation)
        fraction += finding.savings_fraction

    if not issues:
        issues.append(NO_ISSUES)
        recommendations.append(NO_ISSUES_ACTION)

    return {
        "severity":          severity,
        "issues":            issues,
        "recommendations":   recommendations,
        # round first so float noise (0.1 + 0.2) cannot floor a whole token away
        "potential_savings": math.floor(round(metrics["context_budget"] * fraction, 6)),
    }
