"""
Dependency graph construction.

Turns (path, content) records into a frozen networkx DiGraph:
one node per record carrying exports / token_cost / lines_of_code,
one edge per resolved local import. Imports that do not resolve to a
scanned file are dropped.
"""
from __future__ import annotations

import logging
import posixpath
from typing import Iterable

import networkx as nx

from ..config import AnalyzerConfig
from .domains import DomainMatcher, infer_domain
from .facts import count_lines, estimate_tokens, extract_exports, extract_imports

logger = logging.getLogger(__name__)

RESOLVE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".d.ts")

JS_TO_TS = {
    ".js":  (".ts", ".tsx", ".d.ts"),
    ".jsx": (".tsx",),
    ".mjs": (".mts",),
    ".cjs": (".cts",),
}


def _normalize(path: str) -> str:
    return posixpath.normpath(path.replace("\\", "/"))


def _candidates(base: str) -> list[str]:
    """
    Candidates in lookup order: base, base with a JS extension swapped for
    its TS source (ESM-style './foo.js' naming foo.ts), base + ext,
    base/index + ext.
    """
    out = [base]
    stem, suffix = posixpath.splitext(base)
    out.extend(stem + ts for ts in JS_TO_TS.get(suffix, ()))
    out.extend(base + ext for ext in RESOLVE_EXTENSIONS)
    out.extend(posixpath.join(base, "index" + ext) for ext in RESOLVE_EXTENSIONS)
    return out


class ImportResolver:
    """Resolves import specifiers against the set of scanned paths."""

    def __init__(self, paths: Iterable[str], include_node_modules: bool = False):
        # normalized path -> path as given in the records
        self._by_norm: dict[str, str] = {_normalize(p): p for p in paths}
        self._include_node_modules = include_node_modules
        self._package_roots: list[str] = []
        if include_node_modules:
            roots = set()
            for norm in self._by_norm:
                head, sep, _ = norm.partition("node_modules/")
                if sep:
                    roots.add(head + sep)
            self._package_roots = sorted(roots, key=len, reverse=True)

    def resolve(self, from_path: str, spec: str) -> str | None:
        if spec.startswith((".", "/")):
            if spec.startswith("/"):
                base = _normalize(spec)
            else:
                base = _normalize(posixpath.join(posixpath.dirname(_normalize(from_path)), spec))
            return self._first_existing(_candidates(base))

        if self._include_node_modules:
            for root in self._package_roots:
                hit = self._first_existing(_candidates(_normalize(root + spec)))
                if hit:
                    return hit
        return None

    def _first_existing(self, candidates: list[str]) -> str | None:
        for c in candidates:
            if c in self._by_norm:
                return self._by_norm[c]
        return None


def build_dependency_graph(
    records: Iterable[tuple[str, str]],
    config: AnalyzerConfig | None = None,
    matcher: DomainMatcher | None = None,
) -> nx.DiGraph:
    """
    Build the dependency graph from (path, content) records.

    records — iterable of (path, content); paths are used verbatim as node keys
    config  — analyzer options (domain inference + include_node_modules)
    matcher — pre-built DomainMatcher; built from config when omitted
    Returns a frozen DiGraph. Node attributes:
        exports        tuple of {name, inferred_domain}
        token_cost     int
        lines_of_code  int
    """
    config  = config or AnalyzerConfig()
    matcher = matcher or DomainMatcher.from_config(config)
    records = list(records)

    resolver = ImportResolver((p for p, _ in records), config.include_node_modules)

    G = nx.DiGraph()
    for path, content in records:
        exports = tuple(
            {"name": name, "inferred_domain": infer_domain(name, path, matcher)}
            for name in extract_exports(content)
        )
        G.add_node(
            path,
            exports=exports,
            token_cost=estimate_tokens(content),
            lines_of_code=count_lines(content),
        )

    dropped = 0
    for path, content in records:
        for spec in extract_imports(content):
            target = resolver.resolve(path, spec)
            if target is None:
                dropped += 1
                logger.debug("Dropped unresolved import %r in %s", spec, path)
                continue
            G.add_edge(path, target)

    logger.debug(
        "Built graph: %d files, %d edges, %d imports dropped",
        G.number_of_nodes(), G.number_of_edges(), dropped,
    )
    return nx.freeze(G)


def dependencies(G: nx.DiGraph, path: str) -> list[str]:
    """Direct local dependencies of path, in import order."""
    return list(G.successors(path))
