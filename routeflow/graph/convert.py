"""Conversion of problems and selections to NetworkX graphs.

The solvers work directly on edge lists; these graphs are used for
diagnostics (reachability, inspection) only.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

import networkx as nx

from routeflow.model.network import Route
from routeflow.model.problem import Problem

_ROLE_GROUPS = (
    ("source", "sources"),
    ("intermediate", "intermediate_nodes"),
    ("sink", "sinks"),
)


def to_networkx(
    problem: Problem, selection: Optional[Iterable[Route]] = None
) -> nx.MultiDiGraph:
    """Build a MultiDiGraph with node roles/quantities and edge costs.

    Args:
        problem: Problem providing nodes and, by default, the edges.
        selection: Optional edge subset to use instead of ``problem.edges``.

    Returns:
        MultiDiGraph with node attributes ``role``, ``capacity``, ``supply``,
        ``demand`` and edge attribute ``cost``. Edge endpoints absent from
        the node lists are added without attributes.
    """
    graph = nx.MultiDiGraph()
    for role, attr in _ROLE_GROUPS:
        for node_id in getattr(problem, attr):
            graph.add_node(
                node_id,
                role=role,
                capacity=problem.capacities.get(node_id),
                supply=problem.supplies.get(node_id),
                demand=problem.demands.get(node_id),
            )

    edges = problem.edges if selection is None else selection
    for edge in edges:
        graph.add_edge(edge.source, edge.target, cost=edge.cost)
    return graph


def unreachable_sinks(problem: Problem) -> List[str]:
    """Return sinks with no directed path from any source, in input order."""
    graph = to_networkx(problem)
    reachable = set()
    for source in problem.sources:
        reachable |= nx.descendants(graph, source)
    return [s for s in problem.sinks if s not in reachable]
