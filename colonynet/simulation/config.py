"""Config — load simulation parameters from YAML files.

Timings, grid strides, the anchor position and the starting cargo live
in YAML and are parsed into a typed dataclass here.  Per-kind numbers
(energy, capacity, recipes, conversions) are not configurable; they
belong to the static table in ``colonynet.network.structures``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from colonynet.grid.coords import Cell, GridLayer
from colonynet.network.structures import ResourceKind

logger = logging.getLogger(__name__)


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay.
        build_duration: Seconds a committed structure spends under
            construction.
        destruct_duration: Seconds a doomed structure takes to vanish.
        destruct_jitter: Maximum random delay added to each destruction
            start, so simultaneous orphans do not vanish together.
        room_stride: World units per ROOM cell.
        anchor: Cell of the initial PrimaryBlock.
        starting_cargo: Resources credited after the anchor is placed,
            keyed by lower-case resource name.
    """

    seed: int = 42
    build_duration: float = 3.0
    destruct_duration: float = 3.0
    destruct_jitter: float = 0.5
    room_stride: float = GridLayer.ROOM.stride
    anchor: Cell = (0, 0)
    starting_cargo: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        anchor = data.get("anchor", cls.anchor)
        return cls(
            seed=data.get("seed", cls.seed),
            build_duration=data.get("build_duration", cls.build_duration),
            destruct_duration=data.get(
                "destruct_duration",
                cls.destruct_duration,
            ),
            destruct_jitter=data.get("destruct_jitter", cls.destruct_jitter),
            room_stride=data.get("room_stride", cls.room_stride),
            anchor=(int(anchor[0]), int(anchor[1])),
            starting_cargo=data.get("starting_cargo", {}),
        )

    def resolved_cargo(self) -> dict[ResourceKind, float]:
        """Map ``starting_cargo`` names onto resource kinds.

        Unknown names are skipped with a warning.
        """
        name_map: dict[str, ResourceKind] = {r.name.lower(): r for r in ResourceKind}
        cargo: dict[ResourceKind, float] = {}
        for name, amount in self.starting_cargo.items():
            resource = name_map.get(name.lower())
            if resource is None:
                logger.warning("Skipping unknown resource %r in starting_cargo", name)
                continue
            cargo[resource] = float(amount)
        return cargo
