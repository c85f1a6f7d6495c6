"""EconomyLedger — energy balance and stored cargo for the whole colony.

One ledger is owned by the engine and handed to every sub-step that
touches resources.  Energy and capacity are rebuilt from the live
structure population every tick; stored amounts persist and are kept
inside ``[0, capacity]`` after every mutation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from colonynet.network.structures import ResourceKind, StructureKind, spec_for

logger = logging.getLogger(__name__)


@dataclass
class EconomyLedger:
    """Aggregate numeric state of the colony economy.

    Attributes:
        energy_available: Total generation of contributing structures.
        energy_in_use: Total consumption of contributing structures.
        current: Stored amount per resource kind.
        capacity: Storage limit per resource kind.
    """

    energy_available: float = 0.0
    energy_in_use: float = 0.0
    current: dict[ResourceKind, float] = field(
        default_factory=lambda: dict.fromkeys(ResourceKind, 0.0),
    )
    capacity: dict[ResourceKind, float] = field(
        default_factory=lambda: dict.fromkeys(ResourceKind, 0.0),
    )

    @property
    def energy_ratio(self) -> float:
        """Return spare energy as a fraction of generation, in ``[0, 1]``.

        A colony with no generation at all reports 0.
        """
        if self.energy_available <= 0:
            return 0.0
        ratio = (self.energy_available - self.energy_in_use) / self.energy_available
        return min(1.0, max(0.0, ratio))

    def recompute(self, population: Iterable[StructureKind]) -> None:
        """Rebuild energy totals and capacities from scratch.

        Stored amounts are then clamped, so losing a Cargo truncates
        whatever no longer fits.

        Args:
            population: Kinds of every contributing structure.
        """
        self.energy_available = 0.0
        self.energy_in_use = 0.0
        self.capacity = dict.fromkeys(ResourceKind, 0.0)

        for kind in population:
            spec = spec_for(kind)
            if spec.energy >= 0:
                self.energy_available += spec.energy
            else:
                self.energy_in_use -= spec.energy
            for resource, amount in spec.capacity.items():
                self.capacity[resource] += amount

        self.clamp()

    def clamp(self) -> None:
        """Force every stored amount into ``[0, capacity]``."""
        for resource in ResourceKind:
            self.current[resource] = min(
                self.capacity[resource],
                max(0.0, self.current[resource]),
            )

    def harvest(self, resource: ResourceKind, amount: float) -> None:
        """Add a signed amount of ``resource``, clamped to capacity.

        Negative amounts debit.  Over- and under-flow are silently cut.

        Args:
            resource: Resource kind to adjust.
            amount: Signed quantity.
        """
        value = self.current[resource] + amount
        self.current[resource] = min(self.capacity[resource], max(0.0, value))

    def count(self, resource: ResourceKind) -> tuple[float, float]:
        """Return ``(current, capacity)`` for ``resource``."""
        return (self.current[resource], self.capacity[resource])

    def free_capacity(self, resource: ResourceKind) -> float:
        """Return how much more of ``resource`` fits in storage."""
        return max(0.0, self.capacity[resource] - self.current[resource])

    def can_afford(self, recipe: Mapping[ResourceKind, float]) -> bool:
        """Return True if every recipe entry is covered by stored cargo."""
        return all(self.current[r] >= amount for r, amount in recipe.items())

    def pay(self, recipe: Mapping[ResourceKind, float]) -> None:
        """Debit every recipe entry."""
        for resource, amount in recipe.items():
            self.harvest(resource, -amount)
        logger.debug("Paid recipe %s", {r.name: a for r, a in recipe.items()})
