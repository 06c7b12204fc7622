"""Shared enums and tagged result types."""

from routeflow.types.base import NodeRole, ViolationKind
from routeflow.types.result import Err, Ok, Result

__all__ = ["NodeRole", "ViolationKind", "Ok", "Err", "Result"]
