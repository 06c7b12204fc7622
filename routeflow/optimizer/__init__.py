"""External route-activation optimizer boundary and the QUBO implementation."""

from routeflow.optimizer.backend import LocalBackend, SamplingBackend
from routeflow.optimizer.base import ExternalOptimizer, ExternalSolution, OptimizerError
from routeflow.optimizer.qubo import QuboModel, encode_problem
from routeflow.optimizer.solver import QuboOptimizer, solve_with_shots

__all__ = [
    "ExternalOptimizer",
    "ExternalSolution",
    "OptimizerError",
    "LocalBackend",
    "SamplingBackend",
    "QuboModel",
    "encode_problem",
    "QuboOptimizer",
    "solve_with_shots",
]
