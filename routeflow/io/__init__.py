"""Tabular ingestion of nodes and routes."""

from routeflow.io.ingest import (
    parse_node_row,
    parse_route_row,
    read_nodes,
    read_routes,
    resolve_references,
)

__all__ = [
    "parse_node_row",
    "parse_route_row",
    "read_nodes",
    "read_routes",
    "resolve_references",
]
