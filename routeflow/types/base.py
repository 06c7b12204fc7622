"""Base enums for the route-activation model."""

from __future__ import annotations

from enum import Enum


class NodeRole(Enum):
    """Role of a node in the supply-chain graph."""

    SOURCE = "source"
    INTERMEDIATE = "intermediate"
    SINK = "sink"

    @classmethod
    def from_string(cls, value: str) -> "NodeRole":
        """Parse a string into a NodeRole enum value.

        Args:
            value: Case-insensitive role name, surrounding whitespace ignored.

        Returns:
            The corresponding NodeRole member.

        Raises:
            ValueError: If the string doesn't match any role.
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            valid = ", ".join(e.value for e in cls)
            raise ValueError(
                f"Invalid node_type '{value}'. Valid values are: {valid}"
            ) from None


class ViolationKind(Enum):
    """Kinds of structural or solver violations reported by the validator."""

    #: A sink has no incoming selected route.
    SINK_UNSERVED = "sink_unserved"
    #: Selected in-degree differs from selected out-degree at an intermediate node.
    FLOW_CONSERVATION = "flow_conservation"
    #: The external optimizer failed; replaces the structural checks for that side.
    SOLVER_ERROR = "solver_error"
