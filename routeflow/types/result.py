"""Two-variant outcome values for fallible operations.

Fallible steps (row parsing, optimizer calls) return ``Ok`` or ``Err``
instead of raising, and callers branch on the variant explicitly::

    match parse_node_row(row, 2):
        case Ok(node):
            ...
        case Err(message):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Success payload."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    """Error payload."""

    error: E

    @property
    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]
