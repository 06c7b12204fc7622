import numpy as np
import pytest
from conftest import make_problem

from routeflow.config import OptimizerConfig
from routeflow.optimizer.qubo import encode_problem, lucas_penalty
from routeflow.types.result import Err, Ok


def _line_problem():
    # A -> M -> S with costs 1 and 2
    return make_problem(
        sources=["A"],
        intermediates=["M"],
        sinks=["S"],
        edges=[("A", "M", 1.0), ("M", "S", 2.0)],
        demands={"S": 1},
    )


def test_lucas_penalty() -> None:
    assert lucas_penalty(2.0, 3) == 7.0
    assert lucas_penalty(-4.0, 0) == 5.0


def test_encode_terms_match_hand_expansion() -> None:
    result = encode_problem(_line_problem())
    assert isinstance(result, Ok)
    model = result.value

    # P = 2 * 3 + 1 = 7, sink bias 0.5 * 7 = 3.5
    assert model.penalty == 7.0
    assert model.terms[(0, 0)] == pytest.approx(1.0 + 7.0)
    assert model.terms[(1, 1)] == pytest.approx(2.0 + 7.0 - 3.5)
    assert model.terms[(0, 1)] == pytest.approx(-14.0)


def test_energy_matches_objective() -> None:
    model = encode_problem(_line_problem()).value

    assert model.energy([0, 0]) == pytest.approx(0.0)
    assert model.energy([1, 0]) == pytest.approx(8.0)
    assert model.energy([0, 1]) == pytest.approx(5.5)
    # Balanced hub: cost 3 minus sink bias 3.5
    assert model.energy([1, 1]) == pytest.approx(-0.5)


def test_to_dense_is_upper_triangular() -> None:
    dense = encode_problem(_line_problem()).value.to_dense()
    assert dense.shape == (2, 2)
    assert np.allclose(np.tril(dense, k=-1), 0.0)


def test_self_loop_on_hub_has_no_conservation_penalty() -> None:
    problem = make_problem(intermediates=["M"], edges=[("M", "M", 1.0)])
    model = encode_problem(problem).value
    assert model.energy([1]) == pytest.approx(1.0)


def test_sink_bias_is_configurable() -> None:
    model = encode_problem(_line_problem(), OptimizerConfig(sink_bias=0.0)).value
    assert model.terms[(1, 1)] == pytest.approx(9.0)


def test_energy_rejects_wrong_length() -> None:
    model = encode_problem(_line_problem()).value
    with pytest.raises(ValueError):
        model.energy([1])


def test_encode_without_edges_is_error() -> None:
    result = encode_problem(make_problem(sinks=["S"]))
    assert isinstance(result, Err)
    assert result.error.kind == "validation"
