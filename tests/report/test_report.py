import json

import pandas as pd

from routeflow.harness import compare
from routeflow.model.network import Route
from routeflow.optimizer.base import OptimizerError
from routeflow.report import selection_frame, write_bad_rows, write_run_artifacts
from routeflow.types.result import Err


class _FailingOptimizer:
    def solve(self, problem, shots):
        return Err(OptimizerError("backend", "unavailable"))


def test_selection_frame_sorted() -> None:
    frame = selection_frame(
        [Route("B", "A", 1.0), Route("A", "C", 2.0), Route("A", "B", 3.0)]
    )
    assert list(frame.columns) == ["from", "to", "cost"]
    assert list(zip(frame["from"], frame["to"])) == [
        ("A", "B"),
        ("A", "C"),
        ("B", "A"),
    ]


def test_write_run_artifacts(tmp_path, tiny_problem) -> None:
    result = compare(tiny_problem, _FailingOptimizer(), shots=5)
    paths = write_run_artifacts(result, tmp_path / "out", {"run_id": "r1"})

    assert set(paths) == {
        "solution_classical",
        "solution_external",
        "violations",
        "metrics",
        "report",
    }
    classical = pd.read_csv(paths["solution_classical"])
    assert len(classical) == 5
    assert classical["cost"].sum() == 15.5
    assert "2.000000" in paths["solution_classical"].read_text(encoding="utf-8")

    external = pd.read_csv(paths["solution_external"])
    assert external.empty and list(external.columns) == ["from", "to", "cost"]

    violations = pd.read_csv(paths["violations"], keep_default_na=False)
    assert violations.to_dict(orient="records") == [
        {
            "solution": "classical",
            "kind": "flow_conservation",
            "node": "W2",
            "details": "in=1 out=2",
        },
        {
            "solution": "external",
            "kind": "solver_error",
            "node": "",
            "details": "quantum solver failed",
        },
    ]

    metrics = json.loads(paths["metrics"].read_text(encoding="utf-8"))
    assert metrics["run_id"] == "r1"
    assert metrics["external_cost"] is None
    assert metrics["classical_violations"] == 1

    report = paths["report"].read_text(encoding="utf-8")
    assert "| external | n/a | 0.000 | 1 |" in report


def test_write_bad_rows(tmp_path) -> None:
    path = write_bad_rows(tmp_path / "bad_rows.csv", ["row=2 x", "row=3 y"])
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines == ["error", "row=2 x", "row=3 y"]
