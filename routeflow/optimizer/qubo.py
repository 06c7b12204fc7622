"""QUBO encoding of route activation.

One binary variable per candidate edge (``x_e = 1`` when route ``e`` is
activated). The objective is

    sum_e cost_e * x_e
    + P * sum_{m in intermediates} (sum_{e into m} x_e - sum_{e out of m} x_e)^2
    - bias * P * sum_{e into a sink} x_e

with ``P = max|cost| * num_nodes + 1``. The conservation term uses the same
edge-count semantics as the validator. Coefficients are stored upper
triangular: ``terms[(i, j)]`` with ``i <= j``, diagonal entries acting as
linear terms because ``x * x == x`` for binaries.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from routeflow.config import OPTIMIZER_CONFIG, OptimizerConfig
from routeflow.logging import get_logger
from routeflow.model.network import Route
from routeflow.model.problem import Problem
from routeflow.optimizer.base import OptimizerError
from routeflow.types.result import Err, Ok, Result

logger = get_logger(__name__)


@dataclass(frozen=True)
class QuboModel:
    """Sparse upper-triangular QUBO over the problem's candidate edges.

    Attributes:
        edges: Candidate edges; variable ``i`` activates ``edges[i]``.
        terms: Coefficients keyed by ``(i, j)`` with ``i <= j``.
        penalty: Penalty weight used for the constraint terms.
    """

    edges: Tuple[Route, ...]
    terms: Dict[Tuple[int, int], float]
    penalty: float

    @property
    def num_variables(self) -> int:
        return len(self.edges)

    def to_dense(self) -> np.ndarray:
        """Return the coefficients as a dense upper-triangular matrix."""
        n = self.num_variables
        matrix = np.zeros((n, n), dtype=float)
        for (i, j), coeff in self.terms.items():
            matrix[i, j] += coeff
        return matrix

    def energy(self, bits: Sequence[int]) -> float:
        """Objective value of a 0/1 assignment."""
        x = np.asarray(bits, dtype=float)
        if x.shape != (self.num_variables,):
            raise ValueError(
                f"Expected {self.num_variables} bits, got shape {x.shape}"
            )
        return float(x @ self.to_dense() @ x)


def lucas_penalty(max_cost: float, num_nodes: int) -> float:
    """Penalty weight large enough to dominate any objective difference."""
    return abs(max_cost) * max(num_nodes, 1) + 1.0


def _add_square(
    terms: Dict[Tuple[int, int], float],
    signed: List[Tuple[int, float]],
    weight: float,
) -> None:
    """Add ``weight * (sum sign_k * x_k)^2`` to ``terms``."""
    for p, (i, si) in enumerate(signed):
        for q in range(p, len(signed)):
            j, sj = signed[q]
            coeff = weight * si * sj * (1.0 if p == q else 2.0)
            terms[(min(i, j), max(i, j))] += coeff


def encode_problem(
    problem: Problem, config: Optional[OptimizerConfig] = None
) -> Result[QuboModel, OptimizerError]:
    """Encode ``problem`` as a QUBO.

    Args:
        problem: Problem to encode.
        config: Optimizer settings (sink bias). Defaults to ``OPTIMIZER_CONFIG``.

    Returns:
        ``Ok(QuboModel)``, or ``Err`` when the problem has no edges.
    """
    cfg = config or OPTIMIZER_CONFIG
    edges = problem.edges
    if not edges:
        return Err(OptimizerError("validation", "Network flow problem has no edges"))

    num_nodes = len(set(problem.node_ids))
    penalty = lucas_penalty(max(abs(e.cost) for e in edges), num_nodes)

    terms: Dict[Tuple[int, int], float] = defaultdict(float)

    for i, edge in enumerate(edges):
        terms[(i, i)] += edge.cost

    for node in problem.intermediate_nodes:
        signed = [(i, 1.0) for i, e in enumerate(edges) if e.target == node]
        signed += [(i, -1.0) for i, e in enumerate(edges) if e.source == node]
        _add_square(terms, signed, penalty)

    sinks = set(problem.sinks)
    for i, edge in enumerate(edges):
        if edge.target in sinks:
            terms[(i, i)] -= cfg.sink_bias * penalty

    logger.debug(
        "Encoded %d edges into QUBO with %d terms (penalty=%.3f)",
        len(edges),
        len(terms),
        penalty,
    )
    return Ok(QuboModel(edges=tuple(edges), terms=dict(terms), penalty=penalty))
