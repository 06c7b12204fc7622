"""routeflow: binary route activation on supply-chain graphs.

Plans goods movement from sources through intermediate hubs to sinks by
deciding, per candidate route, whether it is activated. Provides a greedy
seed-and-repair baseline, a QUBO sampling optimizer, a structural validator
shared by both, and a harness that compares them.

Example:
    from routeflow import Node, NodeRole, Route, build_problem, solve_greedy
    from routeflow import validate_selection

    problem = build_problem(
        [
            Node("F1", NodeRole.SOURCE, capacity=10, supply=10),
            Node("C1", NodeRole.SINK, capacity=5, demand=5),
        ],
        [Route("F1", "C1", 2.5)],
    )
    selection = solve_greedy(problem).selection
    assert validate_selection(problem, selection) == []
"""

from __future__ import annotations

from routeflow import cli, logging
from routeflow._version import __version__
from routeflow.config import OptimizerConfig, RepairConfig
from routeflow.harness import ComparisonResult, SideResult, compare
from routeflow.model.network import Node, Route, incoming, outgoing
from routeflow.model.problem import Problem, build_problem
from routeflow.optimizer import (
    ExternalOptimizer,
    ExternalSolution,
    LocalBackend,
    OptimizerError,
    QuboOptimizer,
    solve_with_shots,
)
from routeflow.solver.greedy import GreedySolution, solve_greedy
from routeflow.types.base import NodeRole, ViolationKind
from routeflow.types.result import Err, Ok, Result
from routeflow.validation import Violation, solver_error_violations, validate_selection

__all__ = [
    "__version__",
    "cli",
    "logging",
    # Model
    "Node",
    "NodeRole",
    "Route",
    "Problem",
    "build_problem",
    "incoming",
    "outgoing",
    # Solvers
    "GreedySolution",
    "solve_greedy",
    "ExternalOptimizer",
    "ExternalSolution",
    "OptimizerError",
    "LocalBackend",
    "QuboOptimizer",
    "solve_with_shots",
    # Validation and comparison
    "Violation",
    "ViolationKind",
    "validate_selection",
    "solver_error_violations",
    "compare",
    "ComparisonResult",
    "SideResult",
    # Config and results
    "RepairConfig",
    "OptimizerConfig",
    "Ok",
    "Err",
    "Result",
]
