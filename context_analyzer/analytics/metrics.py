"""
Graph metrics — pure functions only.

Every function reads a finished (frozen) dependency graph and never
mutates it. The only shared state is the caller-owned depth cache.

Traversals use explicit stacks and per-file state markers instead of
recursion, so deep import chains cannot exhaust the interpreter stack.
"""
from __future__ import annotations

from collections import deque

import networkx as nx

_IN_PROGRESS = 1
_DONE        = 2


def import_depth(G: nx.DiGraph, path: str, cache: dict[str, int] | None = None) -> int:
    """
    Longest chain of dependency edges starting at path.

    depth(f) = 0 without dependencies, else 1 + max(term(d)) where term(d)
    is depth(d), or 0 when d is already on the current traversal path
    (a cycle-closing edge).

    cache — per-analysis memo. Every file whose traversal completes is
            stored, so each file is expanded at most once per analysis and
            the cost is linear in files plus imports. Inside an import cycle
            the value depends on which member was entered first; callers
            that share a cache evaluate roots in graph order.
    """
    if cache is None:
        cache = {}
    if path in cache:
        return cache[path]
    if path not in G:
        return 0

    on_path: set[str] = {path}
    # frame: [file, children iterator, best so far]
    stack: list[list] = [[path, iter(G.successors(path)), 0]]

    while stack:
        frame = stack[-1]
        node, children = frame[0], frame[1]
        try:
            dep = next(children)
        except StopIteration:
            stack.pop()
            on_path.discard(node)
            depth = frame[2]
            cache[node] = depth
            if stack:
                parent = stack[-1]
                parent[2] = max(parent[2], depth + 1)
            continue

        if dep in on_path:
            frame[2] = max(frame[2], 1)
        elif dep in cache:
            frame[2] = max(frame[2], cache[dep] + 1)
        else:
            on_path.add(dep)
            stack.append([dep, iter(G.successors(dep)), 0])

    return cache[path]


def import_depths(G: nx.DiGraph) -> dict[str, int]:
    """import_depth for every file, roots evaluated in graph order."""
    cache: dict[str, int] = {}
    for path in G.nodes:
        import_depth(G, path, cache)
    return {path: cache[path] for path in G.nodes}


def transitive_dependencies(G: nx.DiGraph, path: str) -> list[str]:
    """
    Every file reachable from path in one or more steps.

    Breadth-first, first-discovery order, no duplicates, never path itself
    (even when a cycle leads back to it).
    """
    if path not in G:
        return []
    seen = {path}
    order: list[str] = []
    queue = deque(G.successors(path))
    while queue:
        node = queue.popleft()
        if node in seen:
            continue
        seen.add(node)
        order.append(node)
        queue.extend(d for d in G.successors(node) if d not in seen)
    return order


def context_budget(G: nx.DiGraph, path: str, closure: list[str] | None = None) -> int:
    """Tokens needed to load path plus everything it transitively imports."""
    if path not in G:
        return 0
    if closure is None:
        closure = transitive_dependencies(G, path)
    own = G.nodes[path]["token_cost"]
    return own + sum(G.nodes[d]["token_cost"] for d in closure)


def detect_circular_dependencies(G: nx.DiGraph) -> list[list[str]]:
    """
    Cycles found by a coloured depth-first traversal.

    Files are visited in graph order. Every edge that reaches a file still
    in progress closes a cycle, reconstructed from the traversal stack from
    that file down to the current one. a → b → a yields one cycle [a, b].
    """
    state: dict[str, int] = {}
    cycles: list[list[str]] = []

    for root in G.nodes:
        if root in state:
            continue
        state[root] = _IN_PROGRESS
        path_stack = [root]
        stack = [(root, iter(G.successors(root)))]
        while stack:
            node, children = stack[-1]
            try:
                dep = next(children)
            except StopIteration:
                state[node] = _DONE
                stack.pop()
                path_stack.pop()
                continue

            colour = state.get(dep)
            if colour == _IN_PROGRESS:
                start = path_stack.index(dep)
                cycles.append(path_stack[start:])
            elif colour is None:
                state[dep] = _IN_PROGRESS
                path_stack.append(dep)
                stack.append((dep, iter(G.successors(dep))))

    return cycles


def cycles_by_file(cycles: list[list[str]]) -> dict[str, list[list[str]]]:
    """Index cycles by member file."""
    index: dict[str, list[list[str]]] = {}
    for cycle in cycles:
        for f in dict.fromkeys(cycle):
            index.setdefault(f, []).append(cycle)
    return index
