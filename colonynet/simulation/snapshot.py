"""Snapshot — read-only views of engine state for presentation layers.

Renderers and UI meters read a ``ColonySnapshot`` between ticks rather
than reaching into the engine's mutable state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from colonynet.grid.coords import Cell, Position, to_world
from colonynet.grid.map_store import MapLayer
from colonynet.lifecycle.states import Action, Highlight
from colonynet.network.structures import ResourceKind, StructureKind

if TYPE_CHECKING:
    from colonynet.simulation.engine import SimulationEngine

# Occupancy grid value for empty cells
EMPTY = -1


@dataclass(frozen=True)
class StructureView:
    """One placed structure as presentation sees it."""

    cell: Cell
    kind: StructureKind
    position: Position
    action: Action
    started_at: float
    highlight: Highlight
    on_main: bool = True


@dataclass(frozen=True)
class GhostView:
    """The construct-mode preview instance."""

    kind: StructureKind
    cell: Cell
    position: Position
    available: bool
    highlight: Highlight


@dataclass(frozen=True)
class ColonySnapshot:
    """Everything presentation may read after a tick.

    Attributes:
        tick: Ticks completed.
        now: Simulation time of the last tick.
        structures: Every tracked structure, including ones already
            knocked off Main that are still playing out destruction.
        ghost: Preview instance, if any.
        energy_available: Total generation.
        energy_in_use: Total consumption.
        energy_ratio: Spare energy fraction for the power bar.
        cargo: ``(current, capacity)`` per resource kind.
        bounds: ``(min, max)`` cell corners of the map.
    """

    tick: int
    now: float
    structures: tuple[StructureView, ...]
    ghost: GhostView | None
    energy_available: float
    energy_in_use: float
    energy_ratio: float
    cargo: dict[ResourceKind, tuple[float, float]]
    bounds: tuple[Cell, Cell]

    def occupancy_grid(self) -> NDArray[np.int8]:
        """Return the map as a 2D array indexed ``[y - min_y, x - min_x]``.

        Cells hold ``StructureKind.value`` or ``EMPTY``.  An empty map
        yields a ``(0, 0)`` array.
        """
        (min_x, min_y), (max_x, max_y) = self.bounds
        if min_x > max_x or min_y > max_y:
            return np.full((0, 0), EMPTY, dtype=np.int8)

        grid = np.full((max_y - min_y + 1, max_x - min_x + 1), EMPTY, dtype=np.int8)
        for view in self.structures:
            if not view.on_main:
                continue
            x, y = view.cell
            grid[y - min_y, x - min_x] = view.kind.value
        return grid


def take_snapshot(engine: SimulationEngine) -> ColonySnapshot:
    """Build a snapshot of ``engine`` as of its last tick."""
    stride = engine.config.room_stride
    structures = []
    for cell, record in engine.lifecycle.structures.items():
        structures.append(
            StructureView(
                cell=cell,
                kind=record.kind,
                position=to_world(cell, stride),
                action=record.action,
                started_at=record.state.started_at,
                highlight=record.highlight,
                on_main=engine.store.kind_at(cell, MapLayer.MAIN) is record.kind,
            ),
        )
    # Structures placed straight into the store have no lifecycle record
    for cell, kind in engine.store.cells(MapLayer.MAIN):
        if cell in engine.lifecycle.structures:
            continue
        structures.append(
            StructureView(
                cell=cell,
                kind=kind,
                position=to_world(cell, stride),
                action=Action.IDLE,
                started_at=0.0,
                highlight=Highlight.NONE,
            ),
        )

    ghost = engine.lifecycle.ghost
    ghost_view = (
        GhostView(
            kind=ghost.kind,
            cell=ghost.cell,
            position=ghost.position,
            available=ghost.available,
            highlight=ghost.highlight,
        )
        if ghost is not None
        else None
    )

    ledger = engine.ledger
    return ColonySnapshot(
        tick=engine.tick,
        now=engine.now,
        structures=tuple(structures),
        ghost=ghost_view,
        energy_available=ledger.energy_available,
        energy_in_use=ledger.energy_in_use,
        energy_ratio=ledger.energy_ratio,
        cargo={r: ledger.count(r) for r in ResourceKind},
        bounds=engine.store.bounding_box(),
    )
