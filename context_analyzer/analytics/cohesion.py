"""
Cohesion, fragmentation and domain clustering — pure functions only.

Cohesion is measured inside one file (do its exports agree on a domain?).
Fragmentation is measured across files (is one domain spread over many
small files instead of living in one place?).
"""
from __future__ import annotations

import math
from collections import Counter

import networkx as nx

from .domains import UNKNOWN_DOMAIN


def _most_frequent(domains: list[str]) -> tuple[str, int] | None:
    """Most frequent domain and its count; ties go to the first seen."""
    if not domains:
        return None
    counts = Counter(domains)
    best = max(counts.values())
    for d in domains:
        if counts[d] == best:
            return d, best
    return None


def calculate_cohesion(exports: list[dict] | tuple[dict, ...]) -> float:
    """Share of exports in the file's most frequent domain; 1.0 for <= 1 export."""
    if len(exports) <= 1:
        return 1.0
    domains = [e.get("inferred_domain") or UNKNOWN_DOMAIN for e in exports]
    _, count = _most_frequent(domains)
    return count / len(domains)


def dominant_domain(exports: list[dict] | tuple[dict, ...]) -> str | None:
    """
    The domain a file reports in isolation.

    "unknown" is ignored unless it is the only domain present.
    None for files without exports.
    """
    domains = [e.get("inferred_domain") or UNKNOWN_DOMAIN for e in exports]
    if not domains:
        return None
    known = [d for d in domains if d != UNKNOWN_DOMAIN]
    top = _most_frequent(known or domains)
    return top[0] if top else None


def fragmentation_score(token_costs: list[int]) -> float:
    """1 - largest / total, clamped to [0, 1]; 0 for an empty or zero-token group."""
    total = sum(token_costs)
    if total <= 0:
        return 0.0
    score = 1 - max(token_costs) / total
    return min(1.0, max(0.0, score))


def suggest_structure(domain: str, file_count: int, total_tokens: int) -> dict:
    target_files = max(1, math.ceil(file_count / 3))
    return {
        "target_files": target_files,
        "consolidation_plan": [
            f"Consolidate {file_count} {domain} files into {target_files} cohesive file(s)",
            f"Current token cost: {total_tokens:,}",
            f"Estimated savings: {math.floor(total_tokens * 0.3):,} tokens (30%)",
        ],
    }


def detect_module_clusters(G: nx.DiGraph) -> list[dict]:
    """
    Group files by dominant export domain.

    Returns one cluster per domain shared by at least two files, in order of
    first appearance:
        domain, files, total_tokens, fragmentation_score, avg_cohesion,
        suggested_structure
    """
    groups: dict[str, list[str]] = {}
    for path, data in G.nodes(data=True):
        domain = dominant_domain(data["exports"])
        if domain is None:
            continue
        groups.setdefault(domain, []).append(path)

    clusters = []
    for domain, files in groups.items():
        if len(files) < 2:
            continue
        costs = [G.nodes[f]["token_cost"] for f in files]
        total = sum(costs)
        cohesion = [calculate_cohesion(G.nodes[f]["exports"]) for f in files]
        clusters.append({
            "domain":              domain,
            "files":               files,
            "total_tokens":        total,
            "fragmentation_score": fragmentation_score(costs),
            "avg_cohesion":        sum(cohesion) / len(cohesion),
            "suggested_structure": suggest_structure(domain, len(files), total),
        })
    return clusters


def fragmentation_by_file(clusters: list[dict]) -> dict[str, float]:
    """Per-file fragmentation: the score of the file's cluster."""
    out: dict[str, float] = {}
    for c in clusters:
        for f in c["files"]:
            out[f] = c["fragmentation_score"]
    return out
