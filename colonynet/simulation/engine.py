"""SimulationEngine — the main tick loop.

Owns the map store, the lifecycle table and the economy ledger, and
advances them in a fixed order each tick:

1. Lifecycle (ghost, player selection, connectivity, timers)
2. Economy, unless paused (energy and capacity rebuild, conversions)

External signals (rock impacts, hook returns) are applied between
ticks through ``apply_impact`` and ``apply_harvest``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from colonynet.economy.conversion import run_conversions
from colonynet.economy.ledger import EconomyLedger
from colonynet.grid.coords import to_cell
from colonynet.grid.map_store import LayeredMapStore, MapLayer
from colonynet.lifecycle.builder import ConstructionLifecycle
from colonynet.network.structures import StructureKind
from colonynet.simulation.config import SimulationConfig
from colonynet.simulation.inputs import (
    Clock,
    CursorReading,
    HarvestReturn,
    Impact,
    PlayerMode,
)
from colonynet.simulation.snapshot import ColonySnapshot, take_snapshot

logger = logging.getLogger(__name__)

# Structures whose hook can deliver a catch; the capsule carries one
_HOOK_KINDS = (StructureKind.HOOK, StructureKind.PRIMARY_BLOCK)


@dataclass
class SimulationEngine:
    """Drives the colony simulation forward tick by tick.

    Attributes:
        config: Loaded simulation configuration.
        store: Layered map of placed structures.
        ledger: Energy and cargo state.
        lifecycle: Per-structure state machine and the ghost.
        rng: Master seeded random generator.
        now: Simulation time of the last tick, in seconds.
        tick: Current tick count.
        paused: When True the economy does not run.
    """

    config: SimulationConfig
    store: LayeredMapStore = field(init=False)
    ledger: EconomyLedger = field(init=False)
    lifecycle: ConstructionLifecycle = field(init=False)
    rng: Generator = field(init=False)
    now: float = 0.0
    tick: int = 0
    paused: bool = False

    def __post_init__(self) -> None:
        """Build state from config, place the anchor, credit starting cargo."""
        self.rng = np.random.default_rng(self.config.seed)
        self.store = LayeredMapStore()
        self.ledger = EconomyLedger()
        self.lifecycle = ConstructionLifecycle(
            store=self.store,
            ledger=self.ledger,
            rng=self.rng,
            build_duration=self.config.build_duration,
            destruct_duration=self.config.destruct_duration,
            destruct_jitter=self.config.destruct_jitter,
            room_stride=self.config.room_stride,
        )
        self.lifecycle.add_anchor(self.config.anchor)
        self.ledger.recompute(self.lifecycle.contributing_kinds())
        for resource, amount in self.config.resolved_cargo().items():
            self.ledger.harvest(resource, amount)

    @property
    def mode(self) -> PlayerMode:
        """Current player intent; reverts to idle after a commit or click."""
        return self.lifecycle.mode

    def set_mode(self, mode: PlayerMode) -> None:
        """Switch player intent."""
        self.lifecycle.set_mode(mode)

    def request_construct(self, kind: StructureKind) -> bool:
        """Enter construct mode for ``kind`` if its recipe is affordable."""
        return self.lifecycle.request_construct(kind)

    def request_destruct(self) -> None:
        """Enter destruct mode."""
        self.lifecycle.set_mode(PlayerMode.destruct())

    def pause(self) -> None:
        """Stop the economy; lifecycle timers keep running."""
        self.paused = True

    def resume(self) -> None:
        """Restart the economy."""
        self.paused = False

    def step(self, clock: Clock, cursor: CursorReading | None = None) -> None:
        """Advance the simulation by one tick.

        Args:
            clock: Host time for this tick.
            cursor: Cursor reading, or None when the cursor is off the field.
        """
        self.lifecycle.update(cursor, clock.now)

        if not self.paused:
            population = self.lifecycle.contributing_kinds()
            self.ledger.recompute(population)
            run_conversions(self.ledger, population, clock.delta_time)

        self.now = clock.now
        self.tick += 1

    def advance(
        self,
        delta_time: float,
        cursor: CursorReading | None = None,
    ) -> None:
        """Step once, ``delta_time`` seconds after the previous tick."""
        self.step(Clock(now=self.now + delta_time, delta_time=delta_time), cursor)

    def run(self, seconds: float, delta_time: float = 0.1) -> None:
        """Run without input for ``seconds`` of simulation time.

        Args:
            seconds: Simulation time to cover.
            delta_time: Seconds per tick.
        """
        ticks = round(seconds / delta_time)
        for _ in range(ticks):
            self.advance(delta_time)

    def apply_impact(self, impact: Impact) -> bool:
        """Knock the structure under a rock impact off the map.

        Anchors survive impacts.  The lifecycle notices the missing
        structure on the next tick and plays out its destruction; any
        branch it was holding up follows.

        Returns:
            True if a structure was removed.
        """
        cell = to_cell(impact.position, self.config.room_stride)
        kind = self.store.kind_at(cell, MapLayer.MAIN)
        removed = self.store.remove_structure(cell, MapLayer.MAIN)
        if removed and kind is not None:
            logger.info("Impact destroyed %s at %s", kind.name, cell)
        return removed

    def apply_harvest(self, catch: HarvestReturn) -> bool:
        """Credit a hook's catch to the ledger.

        Only an operating hook (or the anchor's built-in hook) can
        deliver; catches reported for anything else are dropped.

        Returns:
            True if the catch was credited.
        """
        if not any(self.lifecycle.is_operating(catch.hook_cell, k) for k in _HOOK_KINDS):
            logger.debug("Dropped catch for %s: no operating hook", catch.hook_cell)
            return False
        self.ledger.harvest(catch.resource, catch.amount)
        return True

    def snapshot(self) -> ColonySnapshot:
        """Return a read-only view of the current state."""
        return take_snapshot(self)
