"""
Corpus summary — a pure fold over per-file results.
"""
from __future__ import annotations

from .cohesion import suggest_structure

TOP_N                   = 10
DEEP_FILE_DEPTH         = 5
LOW_COHESION_CUTOFF     = 0.6
WELL_ORGANIZED_CUTOFF   = 0.3


def empty_summary() -> dict:
    return {
        "total_files":             0,
        "total_tokens":            0,
        "avg_context_budget":      0,
        "max_context_budget":      0,
        "avg_import_depth":        0,
        "max_import_depth":        0,
        "deep_files":              [],
        "avg_fragmentation":       0,
        "fragmented_modules":      [],
        "avg_cohesion":            0,
        "low_cohesion_files":      [],
        "critical_issues":         0,
        "major_issues":            0,
        "minor_issues":            0,
        "total_potential_savings": 0,
        "top_expensive_files":     [],
    }


def _fragmented_modules(results: list[dict]) -> list[dict]:
    """
    Domains spread over >= 2 files whose mean fragmentation is at least the
    well-organized cutoff, most fragmented first.
    """
    by_domain: dict[str, list[dict]] = {}
    for r in results:
        for domain in r["domains"]:
            by_domain.setdefault(domain, []).append(r)

    modules = []
    for domain, files in by_domain.items():
        if len(files) < 2:
            continue
        score = sum(f["fragmentation_score"] for f in files) / len(files)
        if score < WELL_ORGANIZED_CUTOFF:
            continue
        total_tokens = sum(f["token_cost"] for f in files)
        modules.append({
            "domain":              domain,
            "files":               [f["file"] for f in files],
            "total_tokens":        total_tokens,
            "fragmentation_score": score,
            "avg_cohesion":        sum(f["cohesion_score"] for f in files) / len(files),
            "suggested_structure": suggest_structure(domain, len(files), total_tokens),
        })

    modules.sort(key=lambda m: -m["fragmentation_score"])
    return modules[:TOP_N]


def generate_summary(results: list[dict]) -> dict:
    """
    Roll per-file results up into corpus-wide statistics.

    Top-N lists use stable sorts, so ties keep the order of `results`.
    The input list is never reordered.
    """
    if not results:
        return empty_summary()

    n = len(results)
    budgets = [r["context_budget"] for r in results]
    depths  = [r["import_depth"] for r in results]

    deep_files = sorted(
        ({"file": r["file"], "depth": r["import_depth"]}
         for r in results if r["import_depth"] >= DEEP_FILE_DEPTH),
        key=lambda x: -x["depth"],
    )[:TOP_N]

    low_cohesion_files = sorted(
        ({"file": r["file"], "score": r["cohesion_score"]}
         for r in results if r["cohesion_score"] < LOW_COHESION_CUTOFF),
        key=lambda x: x["score"],
    )[:TOP_N]

    top_expensive_files = [
        {"file": r["file"], "context_budget": r["context_budget"], "severity": r["severity"]}
        for r in sorted(results, key=lambda r: -r["context_budget"])[:TOP_N]
    ]

    def count(severity: str) -> int:
        return sum(1 for r in results if r["severity"] == severity)

    return {
        "total_files":             n,
        "total_tokens":            sum(r["token_cost"] for r in results),
        "avg_context_budget":      sum(budgets) / n,
        "max_context_budget":      max(budgets),
        "avg_import_depth":        sum(depths) / n,
        "max_import_depth":        max(depths),
        "deep_files":              deep_files,
        "avg_fragmentation":       sum(r["fragmentation_score"] for r in results) / n,
        "fragmented_modules":      _fragmented_modules(results),
        "avg_cohesion":            sum(r["cohesion_score"] for r in results) / n,
        "low_cohesion_files":      low_cohesion_files,
        "critical_issues":         count("critical"),
        "major_issues":            count("major"),
        "minor_issues":            count("minor"),
        "total_potential_savings": sum(r["potential_savings"] for r in results),
        "top_expensive_files":     top_expensive_files,
    }
