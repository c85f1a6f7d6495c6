"""ConstructionLifecycle — per-structure build/destroy state machine.

Each tick the lifecycle runs four phases, in order:

1. Construct: move the ghost with the cursor and commit it on click.
2. Select: in destruct mode, a click starts destroying the hovered
   structure.
3. Network: rebuild the Build layer from Main without the doomed
   cells, then start destroying every structure left without a path
   to an anchor.  In destruct mode, also preview what removing the
   hovered cell would orphan.
4. Advance: finish construction and destruction whose time is up.

A destroyed structure's downstream branch becomes orphaned in the next
network phase, so destruction cascades until nothing is left hanging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from colonynet.grid.coords import Cell, GridLayer, to_world
from colonynet.grid.map_store import LayeredMapStore, MapLayer
from colonynet.lifecycle.states import (
    Action,
    ActionState,
    Ghost,
    Highlight,
    StructureState,
)
from colonynet.network.connectivity import disconnected_cells
from colonynet.network.structures import StructureKind, spec_for
from colonynet.simulation.inputs import CursorReading, Mode, PlayerMode

if TYPE_CHECKING:
    from numpy.random import Generator

    from colonynet.economy.ledger import EconomyLedger

logger = logging.getLogger(__name__)


@dataclass
class ConstructionLifecycle:
    """Owns the lifecycle record of every placed structure and the ghost.

    Attributes:
        store: Layered map the lifecycle places into and removes from.
        ledger: Economy ledger debited when construction is committed.
        rng: Seeded generator for destruction jitter.
        build_duration: Seconds from commit until a structure operates.
        destruct_duration: Seconds from doom until a structure is gone.
        destruct_jitter: Upper bound of the random delay added to each
            destruction start.
        room_stride: World units per ROOM cell, for snapping the ghost.
        structures: Lifecycle records keyed by ROOM cell.
        ghost: Preview instance while in construct mode.
        mode: Current player intent.
    """

    store: LayeredMapStore
    ledger: EconomyLedger
    rng: Generator
    build_duration: float = 3.0
    destruct_duration: float = 3.0
    destruct_jitter: float = 0.5
    room_stride: float = GridLayer.ROOM.stride
    structures: dict[Cell, StructureState] = field(default_factory=dict)
    ghost: Ghost | None = None
    mode: PlayerMode = field(default_factory=PlayerMode.idle)

    # -- Setup ---------------------------------------------------------------

    def add_anchor(self, cell: Cell) -> None:
        """Place an operating PrimaryBlock at ``cell``."""
        self.place_operating(cell, StructureKind.PRIMARY_BLOCK)

    def place_operating(self, cell: Cell, kind: StructureKind) -> None:
        """Place ``kind`` on Main already built, bypassing recipe and timer.

        Used for the initial colony layout.
        """
        self.store.place(cell, kind, MapLayer.MAIN)
        self.structures[cell] = StructureState(cell=cell, kind=kind)

    # -- Player intent -------------------------------------------------------

    def set_mode(self, mode: PlayerMode) -> None:
        """Switch player intent, discarding the ghost if construction ends."""
        if mode == self.mode:
            return
        if self.mode.mode is Mode.CONSTRUCT:
            self.ghost = None
        logger.debug("Mode %s -> %s", self.mode.mode.name, mode.mode.name)
        self.mode = mode

    def request_construct(self, kind: StructureKind) -> bool:
        """Enter construct mode for ``kind`` if its recipe is affordable.

        Returns:
            True if construct mode was entered.
        """
        if not self.ledger.can_afford(spec_for(kind).recipe):
            logger.info("Cannot afford %s", spec_for(kind).name)
            return False
        self.set_mode(PlayerMode.construct(kind))
        return True

    # -- Tick ----------------------------------------------------------------

    def update(self, cursor: CursorReading | None, now: float) -> None:
        """Run one lifecycle tick.

        Args:
            cursor: Cursor reading for this tick, if the cursor is over
                the field.
            now: Simulation time in seconds.
        """
        self._construct(cursor, now)
        self._select(cursor, now)
        self._evaluate_network(cursor, now)
        self._advance(now)
        if self.mode.mode is not Mode.DESTRUCT:
            self._hover(cursor)

    def contributing_kinds(self) -> list[StructureKind]:
        """Return the kinds of every operating structure on Main."""
        kinds = []
        for cell, kind in self.store.cells(MapLayer.MAIN):
            record = self.structures.get(cell)
            if record is not None and record.kind is kind and record.is_enabled:
                kinds.append(kind)
        return kinds

    def doomed_cells(self) -> frozenset[Cell]:
        """Return the cells of every structure being destroyed."""
        return frozenset(
            cell
            for cell, record in self.structures.items()
            if record.action is Action.DESTRUCT
        )

    def is_operating(self, cell: Cell, kind: StructureKind) -> bool:
        """Return True if an operating ``kind`` sits at ``cell`` on Main."""
        record = self.structures.get(cell)
        return (
            record is not None
            and record.kind is kind
            and record.is_enabled
            and self.store.kind_at(cell, MapLayer.MAIN) is kind
        )

    # -- Phases --------------------------------------------------------------

    def _construct(self, cursor: CursorReading | None, now: float) -> None:
        if self.mode.mode is not Mode.CONSTRUCT or self.mode.kind is None:
            return
        if cursor is None:
            self.ghost = None
            return

        kind = self.mode.kind
        if self.ghost is None or self.ghost.kind is not kind:
            self.ghost = Ghost(kind=kind, cell=cursor.cell, position=cursor.position)

        ghost = self.ghost
        ghost.cell = cursor.cell
        ghost.available = self.store.is_available(
            cursor.cell,
            kind,
            doomed=self.doomed_cells(),
        )
        if ghost.available:
            ghost.position = to_world(cursor.cell, self.room_stride)
            ghost.highlight = Highlight.GREEN
        else:
            ghost.position = cursor.position
            ghost.highlight = Highlight.RED

        if not (ghost.available and cursor.just_confirmed):
            return

        recipe = spec_for(kind).recipe
        if not self.ledger.can_afford(recipe):
            logger.info("Cannot afford %s at %s", spec_for(kind).name, cursor.cell)
            return

        self.ledger.pay(recipe)
        self.store.place(cursor.cell, kind, MapLayer.MAIN)
        self.structures[cursor.cell] = StructureState(
            cell=cursor.cell,
            kind=kind,
            state=ActionState.construct(now),
        )
        self.ghost = None
        self.mode = PlayerMode.idle()
        logger.info("Construction of %s started at %s", kind.name, cursor.cell)

    def _select(self, cursor: CursorReading | None, now: float) -> None:
        if self.mode.mode is not Mode.DESTRUCT or cursor is None:
            return
        if not cursor.just_confirmed:
            return

        record = self.structures.get(cursor.cell)
        if (
            record is not None
            and record.action is not Action.DESTRUCT
            and self.store.is_structure(cursor.cell, MapLayer.MAIN)
        ):
            self._begin_destruct(record, now)
            logger.info("Destruction of %s ordered at %s", record.kind.name, record.cell)
        self.mode = PlayerMode.idle()

    def _evaluate_network(self, cursor: CursorReading | None, now: float) -> None:
        self.store.sync_preview_from_main()
        for cell in self.doomed_cells():
            self.store.remove(cell, MapLayer.BUILD)

        for cell in disconnected_cells(self.store, MapLayer.BUILD):
            record = self.structures.get(cell)
            if record is not None and record.action is not Action.DESTRUCT:
                logger.debug("%s at %s lost its connection", record.kind.name, cell)
                self._begin_destruct(record, now)

        if self.mode.mode is Mode.DESTRUCT:
            self._preview_destruct(cursor)

    def _preview_destruct(self, cursor: CursorReading | None) -> None:
        target = None
        if cursor is not None and self.store.is_structure(cursor.cell, MapLayer.BUILD):
            target = cursor.cell

        would_orphan = (
            disconnected_cells(self.store, MapLayer.BUILD, excluded=target)
            if target is not None
            else frozenset()
        )
        for cell, record in self.structures.items():
            if record.action is Action.DESTRUCT:
                continue
            if cell == target:
                record.highlight = Highlight.RED
            elif cell in would_orphan:
                record.highlight = Highlight.ORANGE
            else:
                record.highlight = Highlight.NONE

    def _advance(self, now: float) -> None:
        for cell, record in list(self.structures.items()):
            elapsed = record.state.elapsed(now)
            if record.action is Action.CONSTRUCT and elapsed >= self.build_duration:
                record.state = ActionState.idle()
                logger.info("%s at %s is operating", record.kind.name, cell)
            elif record.action is Action.DESTRUCT:
                if elapsed >= self.destruct_duration:
                    self.store.remove(cell, MapLayer.MAIN)
                    del self.structures[cell]
                    logger.info("%s at %s destroyed", record.kind.name, cell)
            elif self.store.kind_at(cell, MapLayer.MAIN) is not record.kind:
                self._begin_destruct(record, now)

    def _hover(self, cursor: CursorReading | None) -> None:
        hovered = cursor.cell if cursor is not None else None
        for cell, record in self.structures.items():
            if record.action is Action.DESTRUCT:
                continue
            if record.is_enabled and self.mode.mode is Mode.IDLE and cell == hovered:
                record.highlight = Highlight.WHITE
            else:
                record.highlight = Highlight.NONE

    def _begin_destruct(self, record: StructureState, now: float) -> None:
        jitter = float(self.rng.uniform(0.0, self.destruct_jitter))
        record.state = ActionState.destruct(now + jitter)
        record.highlight = Highlight.NONE

