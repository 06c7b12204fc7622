"""Side-by-side comparison of the greedy baseline and an external optimizer.

Both selections go through :func:`routeflow.validation.validate_selection`,
and cost/fill rate are recomputed from each selection with the same helpers,
so the two sides are directly comparable. Declared metrics from the external
optimizer are kept alongside for reference.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from time import perf_counter
from typing import Any, Dict, List, Optional, Tuple

from routeflow.config import RepairConfig
from routeflow.logging import get_logger
from routeflow.model.network import Route
from routeflow.model.problem import Problem
from routeflow.model.selection import fill_rate, selection_cost
from routeflow.optimizer.base import ExternalOptimizer
from routeflow.solver.greedy import solve_greedy
from routeflow.types.result import Err, Ok
from routeflow.validation import Violation, solver_error_violations, validate_selection

logger = get_logger(__name__)

CLASSICAL_LABEL = "classical"
EXTERNAL_LABEL = "external"


@dataclass(frozen=True)
class SideResult:
    """Outcome for one solver in a comparison.

    Attributes:
        label: Side name used in reports.
        selection: Selected routes (empty when the solver failed).
        violations: Validator output, or a single SolverError entry.
        total_cost: Sum of selected costs; NaN when the solver failed.
        fill_rate: Fraction of sinks served by the selection.
        elapsed_s: Wall time for the solver call.
        ok: False when the solver returned an error.
        declared_cost: Cost reported by the solver itself, if any.
        declared_fill_rate: Fill rate reported by the solver itself, if any.
        error: Error text when ``ok`` is False.
    """

    label: str
    selection: Tuple[Route, ...]
    violations: List[Violation]
    total_cost: float
    fill_rate: float
    elapsed_s: float
    ok: bool = True
    declared_cost: Optional[float] = None
    declared_fill_rate: Optional[float] = None
    error: Optional[str] = None

    @property
    def violation_count(self) -> int:
        return len(self.violations)


@dataclass(frozen=True)
class ComparisonResult:
    """Both sides of one comparison run."""

    problem: Problem
    classical: SideResult
    external: SideResult
    shots: int
    elapsed_s: float = 0.0

    @property
    def sides(self) -> Tuple[SideResult, SideResult]:
        return (self.classical, self.external)

    def metrics(self) -> Dict[str, Any]:
        """Flat metrics dictionary with one block of keys per side."""
        out: Dict[str, Any] = {"shots": self.shots}
        for side in self.sides:
            out[f"{side.label}_cost"] = side.total_cost
            out[f"{side.label}_fill_rate"] = side.fill_rate
            out[f"{side.label}_violations"] = side.violation_count
            out[f"elapsed_ms_{side.label}"] = round(side.elapsed_s * 1000.0, 3)
        out["elapsed_ms_total"] = round(self.elapsed_s * 1000.0, 3)
        return out

    def violation_rows(self) -> List[Tuple[str, str, str, str]]:
        """``(solution, kind, node, details)`` rows for both sides."""
        return [
            (side.label, v.kind.value, v.node, v.details)
            for side in self.sides
            for v in side.violations
        ]


def run_classical(
    problem: Problem, config: Optional[RepairConfig] = None
) -> SideResult:
    """Run and validate the greedy repair solver."""
    started = perf_counter()
    solution = solve_greedy(problem, config)
    elapsed = perf_counter() - started
    return SideResult(
        label=CLASSICAL_LABEL,
        selection=solution.selection,
        violations=validate_selection(problem, solution.selection),
        total_cost=selection_cost(solution.selection),
        fill_rate=fill_rate(problem, solution.selection),
        elapsed_s=elapsed,
    )


def _failed_side(error: str, elapsed: float) -> SideResult:
    return SideResult(
        label=EXTERNAL_LABEL,
        selection=(),
        violations=solver_error_violations(),
        total_cost=math.nan,
        fill_rate=0.0,
        elapsed_s=elapsed,
        ok=False,
        error=error,
    )


def run_external(
    problem: Problem, optimizer: ExternalOptimizer, shots: int
) -> SideResult:
    """Run and validate an external optimizer.

    A failed optimizer call yields an empty selection, a single SolverError
    violation, NaN cost and a fill rate of 0.0. This covers an ``Err``
    outcome, an exception raised by ``solve`` and a return value that is
    neither ``Ok`` nor ``Err``.
    """
    started = perf_counter()
    try:
        outcome = optimizer.solve(problem, shots)
    except Exception as exc:
        elapsed = perf_counter() - started
        logger.warning("External optimizer raised %s: %s", type(exc).__name__, exc)
        return _failed_side(f"{type(exc).__name__}: {exc}", elapsed)
    elapsed = perf_counter() - started

    match outcome:
        case Err(error):
            logger.warning("External optimizer failed: %s", error)
            return _failed_side(str(error), elapsed)
        case Ok(solution):
            selection = tuple(solution.selection)
            return SideResult(
                label=EXTERNAL_LABEL,
                selection=selection,
                violations=validate_selection(problem, selection),
                total_cost=selection_cost(selection),
                fill_rate=fill_rate(problem, selection),
                elapsed_s=elapsed,
                declared_cost=solution.total_cost,
                declared_fill_rate=solution.fill_rate,
            )
    message = f"Optimizer returned {type(outcome).__name__}, expected Ok or Err"
    logger.warning("External optimizer failed: %s", message)
    return _failed_side(message, elapsed)


def compare(
    problem: Problem,
    optimizer: ExternalOptimizer,
    shots: int,
    repair_config: Optional[RepairConfig] = None,
) -> ComparisonResult:
    """Run both solvers on ``problem`` and validate them identically.

    Args:
        problem: Problem shared read-only by both solvers.
        optimizer: External optimizer.
        shots: Shot count passed through to the optimizer.
        repair_config: Greedy repair settings.

    Returns:
        ComparisonResult with both sides.
    """
    started = perf_counter()
    classical = run_classical(problem, repair_config)
    logger.info(
        "Classical: cost=%.3f fill_rate=%.3f violations=%d",
        classical.total_cost,
        classical.fill_rate,
        classical.violation_count,
    )
    external = run_external(problem, optimizer, shots)
    logger.info(
        "External: cost=%.3f fill_rate=%.3f violations=%d",
        external.total_cost,
        external.fill_rate,
        external.violation_count,
    )
    return ComparisonResult(
        problem=problem,
        classical=classical,
        external=external,
        shots=shots,
        elapsed_s=perf_counter() - started,
    )
