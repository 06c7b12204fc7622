from routeflow.config import (
    OPTIMIZER_CONFIG,
    REPAIR_CONFIG,
    OptimizerConfig,
    RepairConfig,
)


def test_defaults() -> None:
    assert REPAIR_CONFIG.max_passes == 100
    assert OPTIMIZER_CONFIG.num_shots == 1000
    assert OPTIMIZER_CONFIG.max_variables == 20
    assert OPTIMIZER_CONFIG.sink_bias == 0.5


def test_custom_values() -> None:
    assert RepairConfig(max_passes=5).max_passes == 5
    assert OptimizerConfig(num_shots=10).num_shots == 10
