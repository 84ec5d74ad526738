"""
Per-file context analysis — pure functions only.

Builds the graph from already-read records, runs the graph-wide passes
(cycles, clusters) once, then assembles one result dict per file.
"""
from __future__ import annotations

import logging
from typing import Iterable

from ..config import AnalyzerConfig
from .cohesion import calculate_cohesion, detect_module_clusters, fragmentation_by_file
from .domains import UNKNOWN_DOMAIN, DomainMatcher
from .graph import build_dependency_graph
from .issues import SEVERITY_RANK, classify
from .metrics import (
    context_budget,
    cycles_by_file,
    detect_circular_dependencies,
    import_depths,
    transitive_dependencies,
)

logger = logging.getLogger(__name__)


def sort_results(results: list[dict]) -> list[dict]:
    """Most urgent first: severity rank, then larger context budget (stable)."""
    return sorted(
        results,
        key=lambda r: (SEVERITY_RANK[r["severity"]], -r["context_budget"]),
    )


def analyze_records(
    records: Iterable[tuple[str, str]],
    config: AnalyzerConfig | None = None,
) -> list[dict]:
    """
    Analyze (path, content) records.

    Raises ConfigurationError before touching any record when a domain
    pattern does not compile. Returns per-file results, most urgent first.
    """
    config  = config or AnalyzerConfig()
    matcher = DomainMatcher.from_config(config)

    records = list(records)
    if not records:
        return []

    G = build_dependency_graph(records, config, matcher)

    cycles        = detect_circular_dependencies(G)
    cycle_index   = cycles_by_file(cycles)
    clusters      = detect_module_clusters(G)
    fragmentation = fragmentation_by_file(clusters)
    cluster_of    = {f: c for c in clusters for f in c["files"]}
    logger.debug("%d cycles, %d clusters", len(cycles), len(clusters))

    focus      = config.focus
    want_depth = focus in ("all", "depth")
    want_cohesion = focus in ("all", "cohesion")
    depths = import_depths(G) if want_depth else {}

    results = []
    for path in G.nodes:
        node = G.nodes[path]

        depth    = depths.get(path, 0)
        dep_list = transitive_dependencies(G, path) if want_depth else []
        budget   = context_budget(G, path, dep_list) if focus == "all" else node["token_cost"]
        cohesion = calculate_cohesion(node["exports"]) if want_cohesion else 1.0
        frag     = fragmentation.get(path, 0.0)
        circular = cycle_index.get(path, [])

        cluster = cluster_of.get(path)
        related = [f for f in cluster["files"] if f != path] if cluster else []

        domains = list(dict.fromkeys(
            e["inferred_domain"] or UNKNOWN_DOMAIN for e in node["exports"]
        ))

        metrics = {
            "file":                path,
            "import_depth":        depth,
            "context_budget":      budget,
            "cohesion_score":      cohesion,
            "fragmentation_score": frag,
            "circular_deps":       circular,
        }
        verdict = classify(metrics, config)

        results.append({
            "file":                path,
            "token_cost":          node["token_cost"],
            "lines_of_code":       node["lines_of_code"],
            "import_depth":        depth,
            "dependency_count":    len(dep_list),
            "dependency_list":     dep_list,
            "circular_deps":       circular,
            "cohesion_score":      cohesion,
            "domains":             domains,
            "export_count":        len(node["exports"]),
            "context_budget":      budget,
            "fragmentation_score": frag,
            "related_files":       related,
            **verdict,
        })

    return sort_results(results)
