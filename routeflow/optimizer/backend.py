"""Sampling backends for QUBO models.

A backend turns a :class:`~routeflow.optimizer.qubo.QuboModel` into a list of
candidate 0/1 assignments, one per shot. :class:`LocalBackend` is a classical
in-process stand-in: each shot starts from a random assignment and applies
single-bit-flip descent until no flip lowers the energy.
"""

from __future__ import annotations

from typing import List, Optional, Protocol, runtime_checkable

import numpy as np

from routeflow.config import OPTIMIZER_CONFIG
from routeflow.logging import get_logger
from routeflow.optimizer.base import OptimizerError
from routeflow.optimizer.qubo import QuboModel
from routeflow.seed_manager import SeedManager
from routeflow.types.result import Err, Ok, Result

logger = get_logger(__name__)

# Energy improvements smaller than this are treated as no improvement
_EPS = 1e-12


@runtime_checkable
class SamplingBackend(Protocol):
    """Backend interface used by the QUBO optimizer."""

    name: str

    def sample(
        self, model: QuboModel, shots: int
    ) -> Result[List[np.ndarray], OptimizerError]: ...


class LocalBackend:
    """Random-restart bit-flip descent sampler.

    Args:
        seed: Master seed for reproducible sampling. None draws from OS entropy.
        max_variables: Largest model accepted; bigger models are rejected.
        sweeps: Maximum descent sweeps per shot.
    """

    name = "local"

    def __init__(
        self,
        seed: Optional[int] = None,
        max_variables: Optional[int] = None,
        sweeps: Optional[int] = None,
    ) -> None:
        self.seed = seed
        self.max_variables = (
            OPTIMIZER_CONFIG.max_variables if max_variables is None else max_variables
        )
        self.sweeps = OPTIMIZER_CONFIG.local_search_sweeps if sweeps is None else sweeps

    def sample(
        self, model: QuboModel, shots: int
    ) -> Result[List[np.ndarray], OptimizerError]:
        """Draw ``shots`` locally optimal assignments for ``model``."""
        n = model.num_variables
        if shots <= 0:
            return Err(OptimizerError("validation", "Number of shots must be positive"))
        if n > self.max_variables:
            return Err(
                OptimizerError(
                    "backend",
                    f"Model needs {n} variables; {self.name} backend supports "
                    f"at most {self.max_variables}",
                )
            )

        rng = SeedManager(self.seed).create_generator("local_backend", n, shots)
        upper = model.to_dense()
        diag = np.diag(upper).copy()
        coupling = upper + upper.T
        np.fill_diagonal(coupling, 0.0)

        samples: List[np.ndarray] = []
        for _ in range(shots):
            x = rng.integers(0, 2, size=n)
            for _sweep in range(self.sweeps):
                improved = False
                for k in rng.permutation(n):
                    delta = (1 - 2 * x[k]) * (diag[k] + coupling[k] @ x)
                    if delta < -_EPS:
                        x[k] ^= 1
                        improved = True
                if not improved:
                    break
            samples.append(x.copy())

        logger.debug("Drew %d samples over %d variables", shots, n)
        return Ok(samples)
