"""Shared fixtures for the colonynet test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from colonynet.economy.ledger import EconomyLedger
from colonynet.grid.coords import Cell, to_world
from colonynet.grid.map_store import LayeredMapStore
from colonynet.lifecycle.builder import ConstructionLifecycle
from colonynet.network.structures import ResourceKind, StructureKind
from colonynet.simulation.config import SimulationConfig
from colonynet.simulation.engine import SimulationEngine
from colonynet.simulation.inputs import CursorReading


def cursor_at(cell: Cell, *, confirmed: bool = False) -> CursorReading:
    """A cursor reading centred on ``cell``."""
    return CursorReading(cell, to_world(cell, 2.01), just_confirmed=confirmed)


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def store() -> LayeredMapStore:
    """An empty layered map store."""
    return LayeredMapStore()


@pytest.fixture
def chain_store() -> LayeredMapStore:
    """Anchor at (0, 0) with empty rooms at (1, 0), (2, 0), (3, 0)."""
    s = LayeredMapStore()
    s.place((0, 0), StructureKind.PRIMARY_BLOCK)
    for x in (1, 2, 3):
        s.place((x, 0), StructureKind.EMPTY_ROOM)
    return s


@pytest.fixture
def ledger() -> EconomyLedger:
    """A ledger sized by a lone PrimaryBlock."""
    led = EconomyLedger()
    led.recompute([StructureKind.PRIMARY_BLOCK])
    return led


@pytest.fixture
def lifecycle(
    store: LayeredMapStore,
    ledger: EconomyLedger,
    rng: Generator,
) -> ConstructionLifecycle:
    """A lifecycle with an anchor at (0, 0) and 40 Silicon, 50 Stone."""
    lc = ConstructionLifecycle(store=store, ledger=ledger, rng=rng)
    lc.add_anchor((0, 0))
    ledger.harvest(ResourceKind.SILICON, 40.0)
    ledger.harvest(ResourceKind.STONE, 50.0)
    return lc


@pytest.fixture
def default_config() -> SimulationConfig:
    """Default simulation config (no YAML file needed)."""
    return SimulationConfig()


@pytest.fixture
def engine(default_config: SimulationConfig) -> SimulationEngine:
    """An engine with the anchor at (0, 0) and empty cargo holds."""
    return SimulationEngine(config=default_config)
