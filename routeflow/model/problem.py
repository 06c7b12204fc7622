"""Problem container and builder.

A :class:`Problem` is assembled once per run from already-validated nodes
and routes, then shared read-only with the solvers and the validator.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from routeflow.model.network import Node, Route
from routeflow.types.base import NodeRole


def _frozen(mapping: Mapping[str, int]) -> Mapping[str, int]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class Problem:
    """Route-activation problem over a directed supply-chain graph.

    Attributes:
        sources: Source node ids in input order.
        sinks: Sink node ids in input order.
        intermediate_nodes: Intermediate node ids in input order.
        edges: All candidate routes in input order. Duplicate
            ``(source, target)`` pairs are allowed here.
        capacities: Capacity per node id.
        demands: Demand per sink id, for sinks that declare one.
        supplies: Supply per source id, for sources that declare one.
    """

    sources: Tuple[str, ...] = ()
    sinks: Tuple[str, ...] = ()
    intermediate_nodes: Tuple[str, ...] = ()
    edges: Tuple[Route, ...] = ()
    capacities: Mapping[str, int] = field(default_factory=dict)
    demands: Mapping[str, int] = field(default_factory=dict)
    supplies: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sources", tuple(self.sources))
        object.__setattr__(self, "sinks", tuple(self.sinks))
        object.__setattr__(self, "intermediate_nodes", tuple(self.intermediate_nodes))
        object.__setattr__(self, "edges", tuple(self.edges))
        object.__setattr__(self, "capacities", _frozen(self.capacities))
        object.__setattr__(self, "demands", _frozen(self.demands))
        object.__setattr__(self, "supplies", _frozen(self.supplies))

    @property
    def node_ids(self) -> Tuple[str, ...]:
        """All node ids: sources, then intermediates, then sinks."""
        return self.sources + self.intermediate_nodes + self.sinks

    @property
    def total_demand(self) -> int:
        """Sum of declared sink demands."""
        return sum(self.demands.values())


def build_problem(nodes: Iterable[Node], routes: Iterable[Route]) -> Problem:
    """Assemble a :class:`Problem` from nodes and routes.

    Nodes are partitioned by role; every node contributes its capacity and
    optional supply/demand values are projected where present.

    Args:
        nodes: Validated nodes.
        routes: Validated routes; order is preserved.

    Returns:
        New immutable Problem.
    """
    nodes = list(nodes)
    return Problem(
        sources=tuple(n.id for n in nodes if n.role is NodeRole.SOURCE),
        sinks=tuple(n.id for n in nodes if n.role is NodeRole.SINK),
        intermediate_nodes=tuple(
            n.id for n in nodes if n.role is NodeRole.INTERMEDIATE
        ),
        edges=tuple(routes),
        capacities={n.id: n.capacity for n in nodes},
        demands={n.id: n.demand for n in nodes if n.demand is not None},
        supplies={n.id: n.supply for n in nodes if n.supply is not None},
    )
