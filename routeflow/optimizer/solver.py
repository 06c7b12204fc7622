"""QUBO route-activation optimizer.

Pipeline: problem -> QUBO -> backend samples -> decoded selections -> best
sample. The best sample is the one with the lowest QUBO energy; ties go to
the lower total cost, then to the earlier sample.
"""

from __future__ import annotations

from time import perf_counter
from typing import List, Optional, Sequence, Tuple

from routeflow.config import OPTIMIZER_CONFIG, OptimizerConfig
from routeflow.logging import get_logger
from routeflow.model.network import Route
from routeflow.model.problem import Problem
from routeflow.model.selection import dedupe_selection, selection_cost
from routeflow.optimizer.backend import SamplingBackend
from routeflow.optimizer.base import ExternalSolution, OptimizerError
from routeflow.optimizer.qubo import QuboModel, encode_problem
from routeflow.types.result import Err, Ok, Result

logger = get_logger(__name__)


def decode_sample(model: QuboModel, bits: Sequence[int]) -> Tuple[Route, ...]:
    """Return the edges activated by ``bits``, unique by ``(source, target)``."""
    chosen = [edge for edge, bit in zip(model.edges, bits) if int(bit) == 1]
    return tuple(dedupe_selection(chosen))


def declared_fill_rate(problem: Problem, selection: Sequence[Route]) -> float:
    """Sink-bound selected edges over total declared demand (0.0 without demand)."""
    total_demand = problem.total_demand
    if total_demand <= 0:
        return 0.0
    sinks = set(problem.sinks)
    satisfied = sum(1 for e in selection if e.target in sinks)
    return satisfied / total_demand


def solve_with_shots(
    backend: SamplingBackend,
    problem: Problem,
    shots: int,
    config: Optional[OptimizerConfig] = None,
) -> Result[ExternalSolution, OptimizerError]:
    """Solve ``problem`` on ``backend`` with ``shots`` samples.

    Args:
        backend: Sampling backend; treated as opaque.
        problem: Problem to solve.
        shots: Number of samples to draw.
        config: Optimizer settings. Defaults to ``OPTIMIZER_CONFIG``.

    Returns:
        ``Ok(ExternalSolution)`` with the best decoded sample, or ``Err``.
    """
    started = perf_counter()

    if not problem.edges:
        return Err(OptimizerError("validation", "Network flow problem has no edges"))
    if shots <= 0:
        return Err(OptimizerError("validation", "Number of shots must be positive"))

    match encode_problem(problem, config or OPTIMIZER_CONFIG):
        case Err() as failed:
            return failed
        case Ok(model):
            pass

    try:
        sampled = backend.sample(model, shots)
    except Exception as exc:
        logger.warning("Backend %s raised during sampling: %s", backend.name, exc)
        return Err(OptimizerError("backend", f"{backend.name} backend failed: {exc}"))

    match sampled:
        case Err() as failed:
            return failed
        case Ok(samples):
            pass

    candidates: List[Tuple[float, float, int, Tuple[Route, ...]]] = []
    for index, bits in enumerate(samples):
        selection = decode_sample(model, bits)
        if not selection:
            continue
        candidates.append(
            (model.energy(bits), selection_cost(selection), index, selection)
        )

    if not candidates:
        return Err(
            OptimizerError(
                "decode", "No valid network flow solutions found in samples"
            )
        )

    energy, cost, _, selection = min(candidates, key=lambda c: c[:3])
    elapsed = perf_counter() - started
    logger.debug(
        "Best of %d decoded samples: energy=%.3f cost=%.3f routes=%d",
        len(candidates),
        energy,
        cost,
        len(selection),
    )
    return Ok(
        ExternalSolution(
            selection=selection,
            total_cost=cost,
            fill_rate=declared_fill_rate(problem, selection),
            backend_name=backend.name,
            num_shots=shots,
            elapsed_s=elapsed,
            best_energy=energy,
        )
    )


class QuboOptimizer:
    """:class:`~routeflow.optimizer.base.ExternalOptimizer` backed by a sampler.

    Args:
        backend: Sampling backend handle.
        config: Optimizer settings. Defaults to ``OPTIMIZER_CONFIG``.
    """

    def __init__(
        self, backend: SamplingBackend, config: Optional[OptimizerConfig] = None
    ) -> None:
        self.backend = backend
        self.config = config or OPTIMIZER_CONFIG

    def solve(
        self, problem: Problem, shots: int
    ) -> Result[ExternalSolution, OptimizerError]:
        return solve_with_shots(self.backend, problem, shots, self.config)
