"""Command-line interface for routeflow."""

from __future__ import annotations

import argparse
import logging
import math
import sys
from dataclasses import dataclass, field
from pathlib import Path
from time import perf_counter
from typing import Any, Dict, List, Optional

from routeflow.config import OPTIMIZER_CONFIG, RepairConfig
from routeflow.dsl.loader import load_scenario
from routeflow.graph.convert import unreachable_sinks
from routeflow.harness import compare
from routeflow.io.ingest import read_nodes, read_routes, resolve_references
from routeflow.logging import get_logger, set_global_log_level
from routeflow.model.network import Node, Route
from routeflow.model.problem import build_problem
from routeflow.optimizer.backend import LocalBackend
from routeflow.optimizer.solver import QuboOptimizer
from routeflow.report import write_bad_rows, write_json, write_run_artifacts
from routeflow.utils.output_paths import (
    ensure_dir,
    file_sha256,
    new_run_id,
    resolve_output_dir,
)

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_NO_INPUT = 2


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width

    Returns:
        Formatted table string, empty when there are no rows.
    """
    if not rows:
        return ""

    all_data = [headers] + rows
    col_widths = [
        max(max(len(str(row[i])) for row in all_data), min_width)
        for i in range(len(headers))
    ]

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    lines.extend(format_row(row) for row in rows)
    return "\n".join(lines)


def _format_cost(value: float) -> str:
    """Cost with up to three decimals, ``n/a`` for NaN."""
    if math.isnan(value):
        return "n/a"
    s = f"{value:,.3f}"
    return s.rstrip("0").rstrip(".") if "." in s else s


@dataclass
class _Inputs:
    """Nodes, routes and diagnostics gathered from CSV or scenario files."""

    nodes: List[Node] = field(default_factory=list)
    routes: List[Route] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    shots: Optional[int] = None
    seed: Optional[int] = None
    max_passes: Optional[int] = None


def _load_inputs(
    nodes_path: Optional[Path],
    routes_path: Optional[Path],
    scenario_path: Optional[Path],
) -> _Inputs:
    inputs = _Inputs()
    if scenario_path is not None:
        scenario = load_scenario(scenario_path)
        inputs.nodes = scenario.nodes
        inputs.routes = scenario.routes
        inputs.errors = list(scenario.errors)
        inputs.shots = scenario.shots
        inputs.seed = scenario.seed
        inputs.max_passes = scenario.max_passes
        inputs.metadata.update(
            scenario_path=str(scenario_path),
            scenario_sha256=file_sha256(scenario_path),
        )
    else:
        if nodes_path is None or routes_path is None:
            raise ValueError("both nodes and routes paths are required")
        inputs.nodes, node_errors = read_nodes(nodes_path)
        inputs.routes, route_errors = read_routes(routes_path)
        inputs.errors = node_errors + route_errors
        inputs.metadata.update(
            nodes_path=str(nodes_path),
            routes_path=str(routes_path),
            nodes_sha256=file_sha256(nodes_path),
            routes_sha256=file_sha256(routes_path),
        )

    inputs.routes, ref_errors = resolve_references(inputs.nodes, inputs.routes)
    inputs.errors.extend(ref_errors)
    inputs.metadata.update(
        nodes_count=len(inputs.nodes), routes_count=len(inputs.routes)
    )
    return inputs


def _load_inputs_or_exit(
    nodes_path: Optional[Path],
    routes_path: Optional[Path],
    scenario_path: Optional[Path],
) -> _Inputs:
    """Load inputs, exiting with status 1 on unreadable or invalid files."""
    try:
        return _load_inputs(nodes_path, routes_path, scenario_path)
    except FileNotFoundError as e:
        logger.error(f"Input file not found: {e.filename}")
        print(f"ERROR: Input file not found: {e.filename}")
        sys.exit(EXIT_INPUT_ERROR)
    except Exception as e:
        logger.error(f"Failed to load inputs: {e}")
        print("ERROR: Failed to load inputs")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(EXIT_INPUT_ERROR)


def _run(
    nodes_path: Optional[Path],
    routes_path: Optional[Path],
    scenario_path: Optional[Path],
    output_dir: Optional[Path],
    shots: Optional[int],
    seed: Optional[int],
    quiet: bool = False,
) -> int:
    """Run one comparison and write its artifacts. Returns the exit code."""
    started = perf_counter()
    out_dir = ensure_dir(resolve_output_dir(output_dir))
    run_id = new_run_id()

    inputs = _load_inputs_or_exit(nodes_path, routes_path, scenario_path)
    effective_shots = shots or inputs.shots or OPTIMIZER_CONFIG.num_shots
    effective_seed = seed if seed is not None else inputs.seed

    write_json(
        out_dir / "run-config.json",
        {
            "run_id": run_id,
            "nodes": str(nodes_path) if nodes_path else None,
            "routes": str(routes_path) if routes_path else None,
            "scenario": str(scenario_path) if scenario_path else None,
            "out": str(out_dir),
            "shots": effective_shots,
            "seed": effective_seed,
        },
    )

    if inputs.errors:
        logger.warning("%d input row(s) rejected; see bad_rows.csv", len(inputs.errors))
        write_bad_rows(out_dir / "bad_rows.csv", inputs.errors)

    if not inputs.nodes or not inputs.routes:
        logger.error("No nodes or no routes parsed")
        (out_dir / "run-report.md").write_text(
            "# Network Flow Optimization\n\n"
            "No nodes or no routes parsed; see bad_rows.csv.\n",
            encoding="utf-8",
        )
        return EXIT_NO_INPUT

    problem = build_problem(inputs.nodes, inputs.routes)
    repair_config = (
        RepairConfig(max_passes=inputs.max_passes) if inputs.max_passes else None
    )
    optimizer = QuboOptimizer(LocalBackend(seed=effective_seed))
    result = compare(problem, optimizer, effective_shots, repair_config)

    metadata = {
        "run_id": run_id,
        **inputs.metadata,
        "optimizer": "QUBO sampling (local backend)",
        "seed": effective_seed,
        "elapsed_ms_run": round((perf_counter() - started) * 1000.0, 3),
    }
    write_run_artifacts(result, out_dir, metadata)

    if not quiet:
        rows = [
            [
                side.label,
                _format_cost(side.total_cost),
                f"{side.fill_rate:.3f}",
                str(side.violation_count),
            ]
            for side in result.sides
        ]
        print(_format_table(["Solution", "Cost", "Fill rate", "Violations"], rows))
        print(f"Wrote outputs to: {out_dir}")
    return EXIT_OK


def _inspect(
    nodes_path: Optional[Path],
    routes_path: Optional[Path],
    scenario_path: Optional[Path],
) -> int:
    """Print a structural summary of the inputs. Returns the exit code."""
    inputs = _load_inputs_or_exit(nodes_path, routes_path, scenario_path)
    problem = build_problem(inputs.nodes, inputs.routes)

    print("NODES")
    print(
        _format_table(
            ["Role", "Count"],
            [
                ["source", str(len(problem.sources))],
                ["intermediate", str(len(problem.intermediate_nodes))],
                ["sink", str(len(problem.sinks))],
            ],
        )
    )
    print(f"ROUTES: {len(problem.edges)}")

    unreachable = unreachable_sinks(problem)
    if unreachable:
        print(f"UNREACHABLE SINKS: {', '.join(unreachable)}")
    if inputs.errors:
        print(f"INPUT ERRORS: {len(inputs.errors)}")
        for message in inputs.errors:
            print(f"   {message}")

    if not inputs.nodes or not inputs.routes:
        return EXIT_NO_INPUT
    return EXIT_OK


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--nodes",
        type=Path,
        default=None,
        help="Nodes CSV (node_id,node_type,capacity,supply,demand)",
    )
    p.add_argument(
        "--routes", type=Path, default=None, help="Routes CSV (from,to,cost)"
    )
    p.add_argument(
        "--scenario",
        type=Path,
        default=None,
        help="Scenario YAML with nodes and routes (replaces --nodes/--routes)",
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the ``routeflow`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``,
            ``sys.argv`` is used.

    Returns:
        Process exit code.
    """
    parser = argparse.ArgumentParser(
        prog="routeflow",
        description="Plan and validate binary route activation on supply-chain graphs.",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress console output (logs only)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser(
        "run", help="Compare the greedy baseline with the QUBO optimizer"
    )
    _add_input_args(run_parser)
    run_parser.add_argument(
        "--out",
        "-o",
        type=Path,
        default=None,
        help="Output directory (default: runs/supplychain/networkflow)",
    )
    run_parser.add_argument(
        "--shots",
        type=int,
        default=None,
        help=f"Optimizer samples (default: {OPTIMIZER_CONFIG.num_shots})",
    )
    run_parser.add_argument(
        "--seed", type=int, default=None, help="Seed for reproducible sampling"
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Summarize inputs and report parse problems"
    )
    _add_input_args(inspect_parser)

    effective_args = sys.argv[1:] if argv is None else argv
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.scenario is None and (args.nodes is None or args.routes is None):
        parser.error("either --scenario or both --nodes and --routes are required")
    if args.command == "run" and args.shots is not None and args.shots <= 0:
        parser.error("--shots must be positive")

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "run":
        return _run(
            nodes_path=args.nodes,
            routes_path=args.routes,
            scenario_path=args.scenario,
            output_dir=args.out,
            shots=args.shots,
            seed=args.seed,
            quiet=args.quiet,
        )
    return _inspect(args.nodes, args.routes, args.scenario)


if __name__ == "__main__":
    sys.exit(main())
