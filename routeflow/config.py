"""Configuration classes for routeflow components."""

from dataclasses import dataclass


@dataclass
class RepairConfig:
    """Configuration for the greedy repair solver."""

    # Upper bound on repair passes; the loop never runs past this count
    max_passes: int = 100

    def __post_init__(self) -> None:
        if isinstance(self.max_passes, bool) or not isinstance(self.max_passes, int):
            raise TypeError("max_passes must be an integer")
        if self.max_passes < 1:
            raise ValueError(f"max_passes must be >= 1, got {self.max_passes}")


@dataclass
class OptimizerConfig:
    """Configuration for the QUBO route-activation optimizer."""

    # Default number of samples drawn from the backend
    num_shots: int = 1000

    # Largest model (one variable per candidate route) the local backend accepts
    max_variables: int = 20

    # Reward per incoming sink edge, as a fraction of the penalty weight
    sink_bias: float = 0.5

    # Bit-flip descent sweeps per shot in the local backend
    local_search_sweeps: int = 50


# Global configuration instances
REPAIR_CONFIG = RepairConfig()
OPTIMIZER_CONFIG = OptimizerConfig()
