"""Greedy seed-and-repair baseline solver.

The solver activates the cheapest incoming route of every sink, then closes
conservation gaps at intermediate nodes by activating extra incoming routes.
Conservation here is counted on selected edges: an intermediate node is
balanced when as many selected routes enter as leave.

Repair only ever adds edges drawn from ``problem.edges``; it never removes or
swaps them. It can therefore stop in a state that still has gaps. The pass
budget in :class:`~routeflow.config.RepairConfig` bounds the loop, and any
remaining gaps are reported by :func:`routeflow.validation.validate_selection`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from routeflow.config import REPAIR_CONFIG, RepairConfig
from routeflow.logging import get_logger
from routeflow.model.network import Route, RouteKey, incoming, outgoing
from routeflow.model.problem import Problem
from routeflow.model.selection import dedupe_selection

logger = get_logger(__name__)


@dataclass(frozen=True)
class GreedySolution:
    """Output of :func:`solve_greedy`.

    Attributes:
        selection: Selected routes, unique by ``(source, target)``.
        passes: Number of repair passes executed.
        converged: True when the loop stopped because a pass added nothing,
            False when it ran out of passes.
    """

    selection: Tuple[Route, ...]
    passes: int
    converged: bool


def _cheapest(candidates: Sequence[Route]) -> Optional[Route]:
    # min() returns the first minimal element, so ties go to input order.
    if not candidates:
        return None
    return min(candidates, key=lambda e: e.cost)


def seed_sinks(problem: Problem) -> List[Route]:
    """Select the cheapest incoming route for each sink that has one."""
    selected: List[Route] = []
    for sink in problem.sinks:
        best = _cheapest(incoming(problem.edges, sink))
        if best is None:
            logger.debug("Sink %s has no incoming route; left unserved", sink)
            continue
        selected.append(best)
    return selected


def _repair_pass(
    problem: Problem, selected: List[Route], keys: Set[RouteKey]
) -> bool:
    """Run one repair pass in place; return True when an edge was added."""
    changed = False
    for node in problem.intermediate_nodes:
        in_count = len(incoming(selected, node))
        out_count = len(outgoing(selected, node))
        if out_count <= in_count:
            continue
        candidates = [e for e in incoming(problem.edges, node) if e.key not in keys]
        best = _cheapest(candidates)
        if best is None:
            logger.debug(
                "No unselected incoming route for %s (in=%d out=%d)",
                node,
                in_count,
                out_count,
            )
            continue
        selected.append(best)
        keys.add(best.key)
        changed = True
        logger.debug(
            "Added %s->%s (cost=%s) for %s", best.source, best.target, best.cost, node
        )
    return changed


def solve_greedy(
    problem: Problem, config: Optional[RepairConfig] = None
) -> GreedySolution:
    """Build a baseline route selection for ``problem``.

    Args:
        problem: Problem to solve; not modified.
        config: Repair settings. Defaults to :data:`routeflow.config.REPAIR_CONFIG`.

    Returns:
        GreedySolution whose selection is drawn from ``problem.edges`` and is
        unique by ``(source, target)``.
    """
    cfg = config or REPAIR_CONFIG

    selected = dedupe_selection(seed_sinks(problem))
    keys = {e.key for e in selected}

    passes = 0
    converged = False
    for _ in range(cfg.max_passes):
        passes += 1
        if not _repair_pass(problem, selected, keys):
            converged = True
            break

    if not converged:
        logger.info(
            "Repair stopped at pass budget (%d passes) with %d routes selected",
            cfg.max_passes,
            len(selected),
        )
    else:
        logger.debug("Repair converged after %d pass(es)", passes)

    return GreedySolution(
        selection=tuple(dedupe_selection(selected)),
        passes=passes,
        converged=converged,
    )
