"""Inputs — value types handed to the engine by external collaborators.

The cursor and the player's mode come from input capture, the clock
from the host loop, and impacts and harvest returns from the physics
layer.  None of them are produced inside the core.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from colonynet.grid.coords import Cell, Position
from colonynet.network.structures import ResourceKind, StructureKind


class Mode(Enum):
    """Player intent."""

    IDLE = auto()
    CONSTRUCT = auto()
    DESTRUCT = auto()


@dataclass(frozen=True)
class PlayerMode:
    """Player intent, with the kind being built in construct mode.

    Attributes:
        mode: Current intent.
        kind: Structure kind to build; set only for CONSTRUCT.
    """

    mode: Mode = Mode.IDLE
    kind: StructureKind | None = None

    @classmethod
    def idle(cls) -> PlayerMode:
        """Return the no-intent mode."""
        return cls(Mode.IDLE)

    @classmethod
    def construct(cls, kind: StructureKind) -> PlayerMode:
        """Return construct mode for ``kind``."""
        return cls(Mode.CONSTRUCT, kind)

    @classmethod
    def destruct(cls) -> PlayerMode:
        """Return destruct mode."""
        return cls(Mode.DESTRUCT)


@dataclass(frozen=True)
class CursorReading:
    """Cursor state for one tick.

    Attributes:
        cell: ROOM cell under the cursor.
        position: Continuous world position of the cursor.
        just_confirmed: True on the tick the player clicked.
    """

    cell: Cell
    position: Position
    just_confirmed: bool = False


@dataclass(frozen=True)
class Clock:
    """Host time for one tick.

    Attributes:
        now: Monotonic seconds since the simulation started.
        delta_time: Seconds since the previous tick.
    """

    now: float
    delta_time: float


@dataclass(frozen=True)
class Impact:
    """A rock hit something at ``position`` (world units)."""

    position: Position


@dataclass(frozen=True)
class HarvestReturn:
    """A hook reeled in a rock carrying ``amount`` of ``resource``.

    Attributes:
        hook_cell: ROOM cell of the hook's structure.
        resource: Resource the rock yields.
        amount: Quantity yielded.
    """

    hook_cell: Cell
    resource: ResourceKind
    amount: float
