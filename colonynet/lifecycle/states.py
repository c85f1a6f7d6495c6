"""Lifecycle state values attached to each structure instance."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from colonynet.grid.coords import Cell, Position
from colonynet.network.structures import StructureKind


class Action(Enum):
    """What a structure is currently doing."""

    IDLE = auto()
    CONSTRUCT = auto()
    DESTRUCT = auto()


class Highlight(Enum):
    """Presentation hint; the simulation never branches on it."""

    NONE = auto()
    WHITE = auto()
    GREEN = auto()
    ORANGE = auto()
    RED = auto()


@dataclass(frozen=True)
class ActionState:
    """An action plus the time it started (unused for IDLE).

    Attributes:
        action: Current action.
        started_at: Simulation time the action began, in seconds.
    """

    action: Action = Action.IDLE
    started_at: float = 0.0

    @classmethod
    def idle(cls) -> ActionState:
        """Return the resting state of an operating structure."""
        return cls(Action.IDLE)

    @classmethod
    def construct(cls, started_at: float) -> ActionState:
        """Return a construction that began at ``started_at``."""
        return cls(Action.CONSTRUCT, started_at)

    @classmethod
    def destruct(cls, started_at: float) -> ActionState:
        """Return a destruction that begins at ``started_at``."""
        return cls(Action.DESTRUCT, started_at)

    def elapsed(self, now: float) -> float:
        """Seconds since the action started."""
        return now - self.started_at


@dataclass
class StructureState:
    """Lifecycle record for one placed structure.

    Attributes:
        cell: ROOM cell the structure occupies.
        kind: Structure kind.
        state: Current action and its start time.
        highlight: Presentation hint.
    """

    cell: Cell
    kind: StructureKind
    state: ActionState = ActionState()
    highlight: Highlight = Highlight.NONE

    @property
    def action(self) -> Action:
        """Return the current action."""
        return self.state.action

    @property
    def is_enabled(self) -> bool:
        """Return True while the structure is operating."""
        return self.state.action is Action.IDLE


@dataclass
class Ghost:
    """The uncommitted preview instance that follows the cursor.

    Attributes:
        kind: Kind the player is about to build.
        cell: Cursor cell the ghost is evaluated against.
        position: World position; snapped to the cell centre when the
            placement is valid, the raw cursor position otherwise.
        available: Whether the last evaluation allowed placement.
        highlight: GREEN when placeable, RED otherwise.
    """

    kind: StructureKind
    cell: Cell
    position: Position
    available: bool = False
    highlight: Highlight = Highlight.GREEN
