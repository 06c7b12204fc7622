"""Helpers over route selections."""

from __future__ import annotations

from typing import Iterable, List, Set

from routeflow.model.network import Route, RouteKey
from routeflow.model.problem import Problem


def dedupe_selection(edges: Iterable[Route]) -> List[Route]:
    """Keep the first edge for each ``(source, target)`` pair, preserving order."""
    seen: Set[RouteKey] = set()
    out: List[Route] = []
    for edge in edges:
        if edge.key in seen:
            continue
        seen.add(edge.key)
        out.append(edge)
    return out


def selection_cost(edges: Iterable[Route]) -> float:
    """Sum of costs over the selected edges."""
    return float(sum(e.cost for e in edges))


def fill_rate(problem: Problem, edges: Iterable[Route]) -> float:
    """Fraction of sinks with at least one incoming selected edge.

    Returns 0.0 for a problem without sinks.
    """
    if not problem.sinks:
        return 0.0
    targets = {e.target for e in edges}
    served = sum(1 for s in problem.sinks if s in targets)
    return served / len(problem.sinks)
