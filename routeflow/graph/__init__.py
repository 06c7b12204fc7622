"""NetworkX views of route-activation problems."""

from routeflow.graph.convert import to_networkx, unreachable_sinks

__all__ = ["to_networkx", "unreachable_sinks"]
