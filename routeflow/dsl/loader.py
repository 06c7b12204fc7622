"""YAML loader + schema validation for route-activation scenarios.

A scenario bundles nodes and routes in one file, with optional run
settings::

    shots: 500
    seed: 7
    nodes:
      - {node_id: F1, node_type: source, capacity: 10, supply: 10}
      - {node_id: C1, node_type: sink, capacity: 5, demand: 5}
    routes:
      - {from: F1, to: C1, cost: 2.5}

Rows are parsed with the same functions as the CSV readers, so scenario
files and CSV files produce identical diagnostics.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import jsonschema
import yaml

from routeflow.io.ingest import parse_node_row, parse_route_row
from routeflow.model.network import Node, Route
from routeflow.types.result import Err, Ok
from routeflow.utils.yaml_utils import normalize_yaml_dict_keys


@dataclass
class Scenario:
    """Parsed scenario contents.

    Attributes:
        nodes: Successfully parsed nodes.
        routes: Successfully parsed routes.
        errors: Row-level diagnostics.
        shots: Optional shot count override.
        seed: Optional sampling seed.
        max_passes: Optional repair pass budget override.
    """

    nodes: List[Node] = field(default_factory=list)
    routes: List[Route] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    shots: Optional[int] = None
    seed: Optional[int] = None
    max_passes: Optional[int] = None


def _load_schema() -> Dict[str, Any]:
    with (
        resources.files("routeflow.schemas")
        .joinpath("scenario.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def load_scenario_yaml(yaml_str: str) -> Scenario:
    """Load and validate a scenario from a YAML string.

    Raises:
        ValueError: If the document is not a mapping.
        jsonschema.ValidationError: If the document does not match the schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")
    data = normalize_yaml_dict_keys(data)

    # Early shape checks give clearer messages than the schema errors
    for section in ("nodes", "routes"):
        if section in data and not isinstance(data[section], list):
            raise ValueError(f"'{section}' must be a list")

    jsonschema.validate(data, _load_schema())

    scenario = Scenario(
        shots=data.get("shots"),
        seed=data.get("seed"),
        max_passes=data.get("max_passes"),
    )
    # Row numbers are 1-based list positions within each section
    for i, row in enumerate(data["nodes"], start=1):
        match parse_node_row(row, i):
            case Ok(node):
                scenario.nodes.append(node)
            case Err(message):
                scenario.errors.append(f"nodes: {message}")
    for i, row in enumerate(data["routes"], start=1):
        match parse_route_row(row, i):
            case Ok(route):
                scenario.routes.append(route)
            case Err(message):
                scenario.errors.append(f"routes: {message}")
    return scenario


def load_scenario(path: Union[str, Path]) -> Scenario:
    """Load and validate a scenario YAML file."""
    return load_scenario_yaml(Path(path).read_text(encoding="utf-8"))
