"""Structural validation of route selections.

Any selection, whether from the greedy solver or an external optimizer, is
checked by the same two counting rules:

- every sink has at least one incoming selected route;
- every intermediate node has equal selected in-degree and out-degree.

Counts are of activated routes, not flow volumes. Violations are values, not
exceptions: a selection with violations is still a complete result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List

from routeflow.model.network import Route, incoming, outgoing
from routeflow.model.problem import Problem
from routeflow.types.base import ViolationKind

SOLVER_FAILED_DETAILS = "quantum solver failed"


@dataclass(frozen=True)
class Violation:
    """One validation finding.

    Attributes:
        kind: Violation category.
        node: Offending node id; empty for solver errors.
        details: Free-text diagnostic.
    """

    kind: ViolationKind
    node: str
    details: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "node": self.node, "details": self.details}


def check_sink_coverage(problem: Problem, selection: List[Route]) -> List[Violation]:
    """Report sinks with no incoming selected route."""
    return [
        Violation(ViolationKind.SINK_UNSERVED, sink, "no incoming selected routes")
        for sink in problem.sinks
        if not incoming(selection, sink)
    ]


def check_conservation(problem: Problem, selection: List[Route]) -> List[Violation]:
    """Report intermediate nodes whose selected in/out counts differ."""
    violations: List[Violation] = []
    for node in problem.intermediate_nodes:
        in_count = len(incoming(selection, node))
        out_count = len(outgoing(selection, node))
        if in_count != out_count:
            violations.append(
                Violation(
                    ViolationKind.FLOW_CONSERVATION,
                    node,
                    f"in={in_count} out={out_count}",
                )
            )
    return violations


def validate_selection(problem: Problem, selection: Iterable[Route]) -> List[Violation]:
    """Return all violations of ``selection`` against ``problem``.

    Sink coverage findings come first, then conservation findings, each in
    the problem's node order. Inputs are not modified.
    """
    edges = list(selection)
    return check_sink_coverage(problem, edges) + check_conservation(problem, edges)


def solver_error_violations(details: str = SOLVER_FAILED_DETAILS) -> List[Violation]:
    """Return the single-entry violation list used when an optimizer fails."""
    return [Violation(ViolationKind.SOLVER_ERROR, "", details)]
