"""Types at the external optimizer boundary.

The comparison harness only relies on :class:`ExternalOptimizer`: one
``solve(problem, shots)`` call returning ``Ok(ExternalSolution)`` or
``Err(OptimizerError)``. How an implementation reaches its answer, and what
backend it talks to, stays behind that call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Tuple, runtime_checkable

from routeflow.model.network import Route
from routeflow.model.problem import Problem
from routeflow.types.result import Result


@dataclass(frozen=True)
class OptimizerError:
    """Failure reported by an optimizer.

    Attributes:
        kind: One of ``validation``, ``encoding``, ``backend``, ``decode``.
        message: Human-readable reason.
    """

    kind: str
    message: str

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


@dataclass(frozen=True)
class ExternalSolution:
    """Candidate selection returned by an optimizer with its declared metrics.

    Attributes:
        selection: Selected routes.
        total_cost: Declared total cost.
        fill_rate: Declared fill rate.
        backend_name: Name of the backend that produced the sample.
        num_shots: Shots requested from the backend.
        elapsed_s: Wall time spent inside the optimizer.
        best_energy: Objective value of the chosen sample, if applicable.
    """

    selection: Tuple[Route, ...]
    total_cost: float
    fill_rate: float
    backend_name: str = ""
    num_shots: int = 0
    elapsed_s: float = 0.0
    best_energy: float = float("nan")


@runtime_checkable
class ExternalOptimizer(Protocol):
    """Anything that can propose a selection for a problem."""

    def solve(
        self, problem: Problem, shots: int
    ) -> Result[ExternalSolution, OptimizerError]: ...
