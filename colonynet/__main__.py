"""Entry point for ``python -m colonynet``.

Loads the YAML config, builds an engine and plays a short scripted
session headlessly: two rooms go up, a crusher and a furnace fill
them, the crusher is torn down again, and the ledger is logged as the
colony runs.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from colonynet.grid.coords import Cell, to_world
from colonynet.network.structures import ResourceKind, StructureKind
from colonynet.simulation.config import SimulationConfig
from colonynet.simulation.engine import SimulationEngine
from colonynet.simulation.inputs import CursorReading, HarvestReturn

logger = logging.getLogger("colonynet")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

_BUILD_ORDER: list[tuple[StructureKind, Cell]] = [
    (StructureKind.EMPTY_ROOM, (1, 0)),
    (StructureKind.EMPTY_ROOM, (0, 1)),
    (StructureKind.CRUSHER, (1, 0)),
    (StructureKind.FURNACE, (0, 1)),
]


def _click(engine: SimulationEngine, cell: Cell, delta_time: float) -> None:
    position = to_world(cell, engine.config.room_stride)
    engine.advance(delta_time, CursorReading(cell, position, just_confirmed=True))


def _log_ledger(engine: SimulationEngine) -> None:
    snap = engine.snapshot()
    stored = ", ".join(
        f"{r.name.lower()}={cur:.1f}/{cap:.0f}"
        for r, (cur, cap) in snap.cargo.items()
        if cap > 0 and cur > 0
    )
    logger.info(
        "t=%.1fs structures=%d power=%.0f%% %s",
        snap.now,
        sum(1 for s in snap.structures if s.on_main),
        snap.energy_ratio * 100,
        stored,
    )


def run_session(
    engine: SimulationEngine,
    seconds: float,
    delta_time: float,
) -> None:
    """Play the scripted build order, then let the colony run.

    Args:
        engine: Freshly built engine.
        seconds: Simulation time to run after the build order.
        delta_time: Seconds per tick.
    """
    settle = engine.config.build_duration + delta_time
    for kind, cell in _BUILD_ORDER:
        if not engine.request_construct(kind):
            continue
        _click(engine, cell, delta_time)
        engine.run(settle, delta_time)
        _log_ledger(engine)

    engine.apply_harvest(
        HarvestReturn(engine.config.anchor, ResourceKind.ICE, amount=5.0),
    )

    engine.request_destruct()
    _click(engine, (1, 0), delta_time)
    engine.run(engine.config.destruct_duration + engine.config.destruct_jitter, delta_time)
    _log_ledger(engine)

    elapsed = 0.0
    while elapsed < seconds:
        engine.run(1.0, delta_time)
        elapsed += 1.0
        _log_ledger(engine)


def main() -> None:
    """Parse CLI args, create engine, run the scripted session."""
    parser = argparse.ArgumentParser(
        prog="colonynet",
        description="colonynet - headless colony network simulation",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--seconds",
        type=float,
        default=10.0,
        help="Simulation seconds to run after the build order (default: 10)",
    )
    parser.add_argument(
        "--tick",
        type=float,
        default=0.1,
        help="Seconds per simulation tick (default: 0.1)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = SimulationConfig.from_yaml(args.config)
    engine = SimulationEngine(config=config)
    run_session(engine, args.seconds, args.tick)


if __name__ == "__main__":
    main()
