"""Route-activation model: nodes, routes, problems and selections."""

from routeflow.model.network import Node, Route, incoming, outgoing
from routeflow.model.problem import Problem, build_problem
from routeflow.model.selection import dedupe_selection, fill_rate, selection_cost

__all__ = [
    "Node",
    "Route",
    "incoming",
    "outgoing",
    "Problem",
    "build_problem",
    "dedupe_selection",
    "fill_rate",
    "selection_cost",
]
