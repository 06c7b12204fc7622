"""Supply-chain graph primitives: Node, Route and degree queries.

Routes are directed and carry a cost. Nodes carry a role and the
role-specific quantities (supply for sources, demand for sinks). The query
helpers are plain filters over any edge sequence; they are used both on the
full candidate edge list and on selections.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from routeflow.types.base import NodeRole

#: Identity of a route within a selection.
RouteKey = Tuple[str, str]


@dataclass(frozen=True)
class Node:
    """A node in the supply-chain graph.

    Attributes:
        id (str): Unique node identifier.
        role (NodeRole): Source, intermediate or sink.
        capacity (int): Throughput ceiling, non-negative.
        supply (Optional[int]): Available supply; only kept for sources.
        demand (Optional[int]): Required demand; only kept for sinks.
    """

    id: str
    role: NodeRole
    capacity: int
    supply: Optional[int] = None
    demand: Optional[int] = None

    def __post_init__(self) -> None:
        # Quantities that are meaningless for the role are dropped.
        if self.role is not NodeRole.SOURCE and self.supply is not None:
            object.__setattr__(self, "supply", None)
        if self.role is not NodeRole.SINK and self.demand is not None:
            object.__setattr__(self, "demand", None)


@dataclass(frozen=True)
class Route:
    """One directed candidate route between two nodes.

    Attributes:
        source (str): Origin node id.
        target (str): Destination node id.
        cost (float): Transport cost of activating the route.
    """

    source: str
    target: str
    cost: float

    @property
    def key(self) -> RouteKey:
        """Return the ``(source, target)`` pair that identifies the route."""
        return (self.source, self.target)


def incoming(edges: Iterable[Route], node_id: str) -> List[Route]:
    """Return the edges whose target is ``node_id``, in input order."""
    return [e for e in edges if e.target == node_id]


def outgoing(edges: Iterable[Route], node_id: str) -> List[Route]:
    """Return the edges whose source is ``node_id``, in input order."""
    return [e for e in edges if e.source == node_id]
