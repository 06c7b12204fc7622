"""CSV ingestion for nodes and routes with row-level diagnostics.

Node files carry ``node_id,node_type,capacity[,supply][,demand]`` and route
files carry ``from,to,cost``. Readers never raise on bad rows: each row is
parsed into ``Ok(item)`` or ``Err(message)`` and the readers return the good
items together with the list of messages. Row numbers are 1-based file line
numbers, so the first data row is row 2.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Mapping, Optional, Tuple, Union

import pandas as pd

from routeflow.logging import get_logger
from routeflow.model.network import Node, Route
from routeflow.types.base import NodeRole
from routeflow.types.result import Err, Ok, Result

logger = get_logger(__name__)

PathLike = Union[str, Path]

NODE_COLUMNS = ["node_id", "node_type", "capacity", "supply", "demand"]
ROUTE_COLUMNS = ["from", "to", "cost"]


def _get(row: Mapping[str, object], key: str) -> Optional[str]:
    value = row.get(key)
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    text = str(value).strip()
    return text or None


def _to_int(text: Optional[str]) -> Optional[int]:
    if text is None:
        return None
    try:
        return int(text)
    except ValueError:
        return None


def _to_float(text: Optional[str]) -> Optional[float]:
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def parse_node_row(row: Mapping[str, object], row_num: int) -> Result[Node, str]:
    """Parse one node record.

    Args:
        row: Column name to raw value mapping.
        row_num: File line number used in diagnostics.

    Returns:
        ``Ok(Node)`` or ``Err`` with a ``row=<n> ...`` message. Unparseable
        optional supply/demand values are treated as absent.
    """
    node_id = _get(row, "node_id")
    node_type = _get(row, "node_type")
    cap_text = _get(row, "capacity")
    if node_id is None or node_type is None or cap_text is None:
        return Err(f"row={row_num} missing node_id/node_type/capacity")

    try:
        role = NodeRole.from_string(node_type)
    except ValueError:
        return Err(f"row={row_num} invalid node_type='{node_type}'")

    capacity = _to_int(cap_text)
    if capacity is None:
        return Err(f"row={row_num} invalid capacity='{cap_text}'")

    return Ok(
        Node(
            id=node_id,
            role=role,
            capacity=capacity,
            supply=_to_int(_get(row, "supply")),
            demand=_to_int(_get(row, "demand")),
        )
    )


def parse_route_row(row: Mapping[str, object], row_num: int) -> Result[Route, str]:
    """Parse one route record into ``Ok(Route)`` or ``Err(message)``."""
    source = _get(row, "from")
    target = _get(row, "to")
    cost_text = _get(row, "cost")
    if source is None or target is None or cost_text is None:
        return Err(f"row={row_num} missing from/to/cost")

    cost = _to_float(cost_text)
    if cost is None:
        return Err(f"row={row_num} invalid cost='{cost_text}'")
    return Ok(Route(source=source, target=target, cost=cost))


def _read_frame(path: PathLike) -> Tuple[pd.DataFrame, List[str]]:
    """Load a CSV as strings, collecting lines with too many fields.

    The header is read as an ordinary row so the first line fixes the field
    count. A wide first data row is then reported like any other instead of
    being taken as an implicit index column.
    """
    malformed: List[str] = []

    def on_bad_line(fields: List[str]) -> None:
        malformed.append(f"malformed line: {','.join(fields)}")
        return None

    try:
        raw = pd.read_csv(
            path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            engine="python",
            on_bad_lines=on_bad_line,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame(), [f"empty file: {path}"]
    columns = [str(c).strip().lower() for c in raw.iloc[0]]
    frame = raw.iloc[1:].reset_index(drop=True)
    frame.columns = columns
    return frame, malformed


def _collect(results: Iterable[Result]) -> Tuple[list, List[str]]:
    items: list = []
    errors: List[str] = []
    for result in results:
        match result:
            case Ok(value):
                items.append(value)
            case Err(message):
                errors.append(message)
    return items, errors


def read_nodes(path: PathLike) -> Tuple[List[Node], List[str]]:
    """Read a node CSV file.

    Returns:
        ``(nodes, errors)``: parsed nodes in file order and diagnostics.
    """
    frame, malformed = _read_frame(path)
    nodes, errors = _collect(
        parse_node_row(row, i + 2)
        for i, row in enumerate(frame.to_dict(orient="records"))
    )
    logger.debug("Read %d nodes from %s (%d errors)", len(nodes), path, len(errors))
    return nodes, malformed + errors


def read_routes(path: PathLike) -> Tuple[List[Route], List[str]]:
    """Read a route CSV file.

    Returns:
        ``(routes, errors)``: parsed routes in file order and diagnostics.
    """
    frame, malformed = _read_frame(path)
    routes, errors = _collect(
        parse_route_row(row, i + 2)
        for i, row in enumerate(frame.to_dict(orient="records"))
    )
    logger.debug("Read %d routes from %s (%d errors)", len(routes), path, len(errors))
    return routes, malformed + errors


def resolve_references(
    nodes: Iterable[Node], routes: Iterable[Route]
) -> Tuple[List[Route], List[str]]:
    """Drop routes whose endpoints name unknown nodes.

    Returns:
        ``(routes, errors)``: routes with both endpoints known, in input order,
        and one diagnostic per unknown endpoint.
    """
    known = {n.id for n in nodes}
    kept: List[Route] = []
    errors: List[str] = []
    for index, route in enumerate(routes):
        missing = [
            f"route={index} unknown {end} node '{node_id}'"
            for end, node_id in (("from", route.source), ("to", route.target))
            if node_id not in known
        ]
        if missing:
            errors.extend(missing)
        else:
            kept.append(route)
    return kept, errors
