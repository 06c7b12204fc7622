import pytest

from routeflow.model.network import Node, Route
from routeflow.model.problem import build_problem
from routeflow.types.base import NodeRole


def _nodes():
    return [
        Node("F1", NodeRole.SOURCE, capacity=10, supply=8),
        Node("W1", NodeRole.INTERMEDIATE, capacity=6),
        Node("C1", NodeRole.SINK, capacity=4, demand=3),
        Node("F2", NodeRole.SOURCE, capacity=5),
        Node("C2", NodeRole.SINK, capacity=2),
    ]


def test_build_problem_partitions_by_role_in_input_order() -> None:
    routes = [Route("F1", "W1", 1.0), Route("W1", "C1", 2.0)]
    problem = build_problem(_nodes(), routes)

    assert problem.sources == ("F1", "F2")
    assert problem.intermediate_nodes == ("W1",)
    assert problem.sinks == ("C1", "C2")
    assert problem.edges == tuple(routes)


def test_build_problem_projects_optional_fields() -> None:
    problem = build_problem(_nodes(), [])

    assert dict(problem.capacities) == {"F1": 10, "W1": 6, "C1": 4, "F2": 5, "C2": 2}
    assert dict(problem.supplies) == {"F1": 8}
    assert dict(problem.demands) == {"C1": 3}
    assert problem.total_demand == 3
    assert problem.node_ids == ("F1", "F2", "W1", "C1", "C2")


def test_problem_is_read_only() -> None:
    problem = build_problem(_nodes(), [Route("F1", "W1", 1.0)])

    with pytest.raises(TypeError):
        problem.capacities["F1"] = 0  # type: ignore[index]
    with pytest.raises(AttributeError):
        problem.sinks = ()  # type: ignore[misc]


def test_build_problem_keeps_duplicate_routes() -> None:
    routes = [Route("F1", "C1", 1.0), Route("F1", "C1", 2.0)]
    problem = build_problem(_nodes(), routes)
    assert len(problem.edges) == 2


def test_build_problem_empty() -> None:
    problem = build_problem([], [])
    assert problem.sources == problem.sinks == problem.intermediate_nodes == ()
    assert problem.edges == ()
    assert problem.total_demand == 0
