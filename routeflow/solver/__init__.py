"""Route-activation solvers."""

from routeflow.solver.greedy import GreedySolution, solve_greedy

__all__ = ["GreedySolution", "solve_greedy"]
