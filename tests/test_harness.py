"""Comparison harness: both sides validated identically."""

import logging
import math

import pytest

from routeflow.harness import compare, run_classical, run_external
from routeflow.optimizer.backend import LocalBackend
from routeflow.optimizer.base import ExternalSolution, OptimizerError
from routeflow.optimizer.solver import QuboOptimizer
from routeflow.solver.greedy import solve_greedy
from routeflow.types.base import ViolationKind
from routeflow.types.result import Err, Ok
from routeflow.validation import Violation


class _FailingOptimizer:
    def solve(self, problem, shots):
        return Err(OptimizerError("backend", "unavailable"))


class _EchoGreedyOptimizer:
    """Returns the greedy selection with made-up declared metrics."""

    def __init__(self) -> None:
        self.calls = []

    def solve(self, problem, shots):
        self.calls.append((problem, shots))
        selection = solve_greedy(problem).selection
        return Ok(ExternalSolution(selection=selection, total_cost=-1.0, fill_rate=9.0))


def test_failed_optimizer_yields_single_solver_error(tiny_problem) -> None:
    side = run_external(tiny_problem, _FailingOptimizer(), shots=10)

    assert side.violations == [
        Violation(ViolationKind.SOLVER_ERROR, "", "quantum solver failed")
    ]
    assert math.isnan(side.total_cost)
    assert side.fill_rate == 0.0
    assert side.selection == ()
    assert not side.ok
    assert "unavailable" in side.error


def test_same_selection_gets_same_validation(tiny_problem) -> None:
    optimizer = _EchoGreedyOptimizer()
    result = compare(tiny_problem, optimizer, shots=7)

    assert optimizer.calls == [(tiny_problem, 7)]
    assert result.external.violations == result.classical.violations
    assert result.external.total_cost == result.classical.total_cost
    assert result.external.fill_rate == result.classical.fill_rate
    # Declared values are kept but not used for comparison
    assert result.external.declared_cost == -1.0
    assert result.external.declared_fill_rate == 9.0


def test_classical_side_metrics(tiny_problem) -> None:
    side = run_classical(tiny_problem)
    assert side.total_cost == pytest.approx(15.5)
    assert side.fill_rate == 1.0
    assert side.violation_count == 1
    assert side.ok


def test_metrics_and_violation_rows(tiny_problem) -> None:
    result = compare(tiny_problem, _FailingOptimizer(), shots=3)
    metrics = result.metrics()

    assert metrics["shots"] == 3
    assert metrics["classical_cost"] == pytest.approx(15.5)
    assert metrics["classical_violations"] == 1
    assert math.isnan(metrics["external_cost"])
    assert metrics["external_fill_rate"] == 0.0
    assert metrics["external_violations"] == 1
    assert {"elapsed_ms_classical", "elapsed_ms_external", "elapsed_ms_total"} <= set(
        metrics
    )

    assert result.violation_rows() == [
        ("classical", "flow_conservation", "W2", "in=1 out=2"),
        ("external", "solver_error", "", "quantum solver failed"),
    ]


def test_compare_with_qubo_optimizer(tiny_problem) -> None:
    result = compare(tiny_problem, QuboOptimizer(LocalBackend(seed=4)), shots=30)

    assert result.external.ok
    assert all(e in tiny_problem.edges for e in result.external.selection)
    assert result.external.total_cost == pytest.approx(
        sum(e.cost for e in result.external.selection)
    )


class _RaisingOptimizer:
    def solve(self, problem, shots):
        raise RuntimeError("backend down")


def test_raising_optimizer_yields_single_solver_error(tiny_problem, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="routeflow"):
        result = compare(tiny_problem, _RaisingOptimizer(), shots=5)

    assert result.classical.ok
    assert result.external.violations == [
        Violation(ViolationKind.SOLVER_ERROR, "", "quantum solver failed")
    ]
    assert result.external.selection == ()
    assert math.isnan(result.external.total_cost)
    assert result.external.fill_rate == 0.0
    assert result.external.error == "RuntimeError: backend down"
    assert "backend down" in caplog.text
    assert ("external", "solver_error", "", "quantum solver failed") in (
        result.violation_rows()
    )


def test_non_result_return_yields_solver_error(tiny_problem) -> None:
    class _Broken:
        def solve(self, problem, shots):
            return None

    side = run_external(tiny_problem, _Broken(), shots=1)

    assert not side.ok
    assert [v.kind for v in side.violations] == [ViolationKind.SOLVER_ERROR]
    assert "NoneType" in side.error
