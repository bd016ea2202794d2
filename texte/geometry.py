"""Position and size value types shared by the buffer and the coordinator."""

from dataclasses import dataclass


@dataclass
class Position:
    """A (column, line) pair in buffer coordinates, both zero-based.

    Positions are never clamped on their own; the coordinator clamps them
    against the buffer before use.
    """
    column: int = 0
    line: int = 0


@dataclass(frozen=True)
class Size:
    """Width and height in character cells."""
    width: int = 0
    height: int = 0
