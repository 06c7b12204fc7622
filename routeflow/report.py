"""Run artifacts for a comparison: selections, violations, metrics, summary.

Files written into the output directory:

- ``run-config.json``: run id, inputs and shot count, written before solving
- ``bad_rows.csv``: one ``error`` column, only when parsing reported problems
- ``solution_classical.csv`` / ``solution_external.csv``: ``from,to,cost``
- ``violations.csv``: ``solution,kind,node,details``
- ``metrics.json``: run metadata plus per-side cost, fill rate, violations, timing
- ``run-report.md``: short human-readable summary
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

from routeflow.harness import ComparisonResult
from routeflow.logging import get_logger
from routeflow.model.network import Route
from routeflow.utils.output_paths import ensure_dir

logger = get_logger(__name__)

SELECTION_COLUMNS = ["from", "to", "cost"]
VIOLATION_COLUMNS = ["solution", "kind", "node", "details"]


def _json_safe(value: Any) -> Any:
    """Replace non-finite floats with None, recursing into containers."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Mapping):
        return {str(k): _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def write_json(path: Path, data: Mapping[str, Any]) -> Path:
    """Write ``data`` as indented JSON with NaN/inf mapped to null."""
    ensure_dir(path.parent)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(_json_safe(data), f, indent=2, default=str)
    return path


def selection_frame(selection: Iterable[Route]) -> pd.DataFrame:
    """Selection as a ``from,to,cost`` frame sorted by ``(from, to)``."""
    frame = pd.DataFrame(
        [(e.source, e.target, e.cost) for e in selection], columns=SELECTION_COLUMNS
    )
    return frame.sort_values(["from", "to"], kind="stable").reset_index(drop=True)


def violations_frame(result: ComparisonResult) -> pd.DataFrame:
    """Violations of both sides as a ``solution,kind,node,details`` frame."""
    return pd.DataFrame(result.violation_rows(), columns=VIOLATION_COLUMNS)


def write_selection(path: Path, selection: Iterable[Route]) -> Path:
    ensure_dir(path.parent)
    selection_frame(selection).to_csv(path, index=False, float_format="%.6f")
    return path


def write_bad_rows(path: Path, errors: List[str]) -> Path:
    ensure_dir(path.parent)
    pd.DataFrame({"error": errors}).to_csv(path, index=False)
    return path


def render_markdown(result: ComparisonResult, metadata: Mapping[str, Any]) -> str:
    """Summary report in Markdown."""
    lines = [
        "# Supply Chain Network Flow Optimization",
        "",
        "Route activation (one binary decision per route), compared across:",
        "",
        "- Classical baseline: greedy seed-and-repair",
        f"- External: {metadata.get('optimizer', 'external optimizer')}",
        "",
        "This is not a continuous min-cost flow model: conservation counts"
        " activated routes, not volumes.",
        "",
        "## Inputs",
        "",
    ]
    for key in ("nodes_path", "routes_path", "scenario_path"):
        if metadata.get(key):
            sha = metadata.get(key.replace("_path", "_sha256"))
            suffix = f" (sha256: `{sha}`)" if sha else ""
            lines.append(f"- {key.split('_')[0].title()}: `{metadata[key]}`{suffix}")
    lines += [
        "",
        "## Results",
        "",
        "| Solution | Cost | Fill rate | Violations |",
        "|---|---|---|---|",
    ]
    for side in result.sides:
        cost = "n/a" if math.isnan(side.total_cost) else f"{side.total_cost:.3f}"
        lines.append(
            f"| {side.label} | {cost} | {side.fill_rate:.3f} | {side.violation_count} |"
        )
    lines += [
        "",
        "## Outputs",
        "",
        "- `solution_classical.csv`",
        "- `solution_external.csv`",
        "- `violations.csv`",
        "- `metrics.json`",
        "",
    ]
    return "\n".join(lines)


def write_run_artifacts(
    result: ComparisonResult,
    output_dir: Path,
    metadata: Optional[Dict[str, Any]] = None,
) -> Dict[str, Path]:
    """Write selections, violations, metrics and the Markdown summary.

    Args:
        result: Comparison to export.
        output_dir: Target directory, created if missing.
        metadata: Extra run fields merged into ``metrics.json`` (run id,
            input paths and digests, counts).

    Returns:
        Mapping of artifact name to written path.
    """
    meta = dict(metadata or {})
    ensure_dir(output_dir)

    paths = {
        "solution_classical": write_selection(
            output_dir / "solution_classical.csv", result.classical.selection
        ),
        "solution_external": write_selection(
            output_dir / "solution_external.csv", result.external.selection
        ),
    }

    violations_path = output_dir / "violations.csv"
    violations_frame(result).to_csv(violations_path, index=False)
    paths["violations"] = violations_path

    metrics = {**meta, **result.metrics()}
    paths["metrics"] = write_json(output_dir / "metrics.json", metrics)

    report_path = output_dir / "run-report.md"
    report_path.write_text(render_markdown(result, meta), encoding="utf-8")
    paths["report"] = report_path

    logger.info("Wrote %d artifacts to %s", len(paths), output_dir)
    return paths
