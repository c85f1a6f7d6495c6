"""Coords — mapping between continuous world space and grid cells.

Cells are plain ``(x, y)`` integer tuples so they hash and compare by
value.  Two grid resolutions exist: ROOM cells hold structures, FINE
cells are used to position harvesters and the rocks they catch.
"""

from __future__ import annotations

import math
from enum import Enum

Cell = tuple[int, int]
Position = tuple[float, float]

# Orthogonal neighbour offsets: +x, -x, +y, -y
_OFFSETS: tuple[Cell, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))


class GridLayer(Enum):
    """Grid resolutions, valued by their world-space stride."""

    ROOM = 2.01
    FINE = 1.0

    @property
    def stride(self) -> float:
        """World units between neighbouring cell centres."""
        return self.value


def to_world(cell: Cell, stride: float) -> Position:
    """Return the world position of a cell centre.

    Args:
        cell: Integer grid address.
        stride: World units per cell.

    Returns:
        ``cell * stride`` component-wise.
    """
    x, y = cell
    return (x * stride, y * stride)


def to_cell(position: Position, stride: float) -> Cell:
    """Return the cell whose centre is nearest to ``position``.

    Shifting by half a stride before flooring makes the cell span
    ``[c - s/2, c + s/2)`` around each centre, so the mapping rounds
    rather than truncates and behaves the same on both sides of zero.

    Args:
        position: Continuous world coordinates.
        stride: World units per cell.

    Returns:
        The integer grid address.
    """
    half = stride / 2.0
    fx, fy = position
    return (math.floor((fx + half) / stride), math.floor((fy + half) / stride))


def neighbours(cell: Cell) -> list[Cell]:
    """Return the four orthogonal neighbours of ``cell``."""
    x, y = cell
    return [(x + dx, y + dy) for dx, dy in _OFFSETS]
