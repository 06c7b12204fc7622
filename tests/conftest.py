"""Shared fixtures for routeflow tests."""

from __future__ import annotations

from typing import Iterable, Optional, Tuple

import pytest

from routeflow.model.network import Route
from routeflow.model.problem import Problem

TINY_NODES_CSV = """node_id,node_type,capacity,supply,demand
F1,source,100,80,
F2,source,60,50,
W1,intermediate,90,,
W2,intermediate,70,,
C1,sink,40,,30
C2,sink,40,,25
C3,sink,30,,20
"""

TINY_ROUTES_CSV = """from,to,cost
F1,W1,4.0
F2,W1,5.5
F2,W2,3.0
W1,C1,2.0
W1,C2,3.5
W2,C2,2.5
W2,C3,4.0
F1,C3,9.0
"""


def make_problem(
    sources: Iterable[str] = (),
    intermediates: Iterable[str] = (),
    sinks: Iterable[str] = (),
    edges: Iterable[Tuple[str, str, float]] = (),
    demands: Optional[dict] = None,
) -> Problem:
    """Problem built directly from id lists and ``(from, to, cost)`` tuples."""
    sources, intermediates, sinks = tuple(sources), tuple(intermediates), tuple(sinks)
    return Problem(
        sources=sources,
        sinks=sinks,
        intermediate_nodes=intermediates,
        edges=tuple(Route(s, t, c) for s, t, c in edges),
        capacities={n: 10 for n in sources + intermediates + sinks},
        demands=demands or {},
    )


@pytest.fixture
def tiny_problem() -> Problem:
    """Two factories, two warehouses, three customers."""
    return make_problem(
        sources=["F1", "F2"],
        intermediates=["W1", "W2"],
        sinks=["C1", "C2", "C3"],
        edges=[
            ("F1", "W1", 4.0),
            ("F2", "W1", 5.5),
            ("F2", "W2", 3.0),
            ("W1", "C1", 2.0),
            ("W1", "C2", 3.5),
            ("W2", "C2", 2.5),
            ("W2", "C3", 4.0),
            ("F1", "C3", 9.0),
        ],
        demands={"C1": 30, "C2": 25, "C3": 20},
    )


@pytest.fixture
def tiny_csv_files(tmp_path):
    """Write the tiny network as nodes/routes CSV files and return their paths."""
    nodes = tmp_path / "nodes.csv"
    routes = tmp_path / "routes.csv"
    nodes.write_text(TINY_NODES_CSV, encoding="utf-8")
    routes.write_text(TINY_ROUTES_CSV, encoding="utf-8")
    return nodes, routes
