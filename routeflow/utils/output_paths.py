"""Helpers for run output locations and input fingerprints."""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

DEFAULT_OUTPUT_DIR = Path("runs") / "supplychain" / "networkflow"


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if missing and return it."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def resolve_output_dir(output_dir: Optional[Path]) -> Path:
    """Return ``output_dir`` or the default run directory under the CWD."""
    return output_dir if output_dir is not None else DEFAULT_OUTPUT_DIR


def new_run_id(now: Optional[datetime] = None) -> str:
    """Return a UTC timestamp run id such as ``20260101_120000``."""
    moment = now or datetime.now(timezone.utc)
    return moment.strftime("%Y%m%d_%H%M%S")


def file_sha256(path: Union[str, Path]) -> str:
    """Hex SHA-256 digest of a file's bytes."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()
