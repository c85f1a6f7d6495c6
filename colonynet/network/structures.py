"""Structures — the closed set of buildable kinds and their static table.

Every per-kind number the simulation needs (energy delta, storage
capacity, construction recipe, conversion rules) lives in one lookup
table, ``CATALOG``.  The economy and the lifecycle read the table; no
kind carries behaviour of its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class StructureKind(Enum):
    """Structure kinds that can occupy a ROOM cell."""

    PRIMARY_BLOCK = auto()
    EMPTY_ROOM = auto()
    FURNACE = auto()
    GENERATOR = auto()
    CRUSHER = auto()
    CARGO = auto()
    HOOK = auto()
    ENRICHMENT = auto()

    @property
    def is_anchor(self) -> bool:
        """Return True for the kind that roots network connectivity."""
        return self is StructureKind.PRIMARY_BLOCK


class ResourceKind(Enum):
    """Tradeable cargo types, raw first, then refined."""

    STONE = auto()
    SILICON = auto()
    ICE = auto()
    COPPER = auto()
    URANIUM = auto()
    AURELIUM = auto()
    WATER = auto()
    COPPER_PLATES = auto()
    URANIUM_RODS = auto()
    BATTERIES = auto()

    @property
    def is_raw(self) -> bool:
        """Return True for resources that are harvested, not produced."""
        return self in _RAW


_RAW = frozenset(
    {
        ResourceKind.STONE,
        ResourceKind.SILICON,
        ResourceKind.ICE,
        ResourceKind.COPPER,
        ResourceKind.URANIUM,
        ResourceKind.AURELIUM,
    },
)


@dataclass(frozen=True)
class ConversionRule:
    """A fixed inputs→output transformation run by a structure each tick.

    Attributes:
        inputs: Resources drawn in equal amounts per unit converted.
        output: Resource produced.
        rate: Maximum input units converted per second.
        ratio: Output units produced per input unit.
    """

    inputs: tuple[ResourceKind, ...]
    output: ResourceKind
    rate: float
    ratio: float = 1.0


@dataclass(frozen=True)
class StructureSpec:
    """Static data for one structure kind.

    Attributes:
        name: Display name (opaque to the core).
        desc: Display description (opaque to the core).
        thumbnail: Icon asset name (opaque to the core).
        energy: Energy delta; positive generates, negative consumes.
        capacity: Storage added per resource kind.
        recipe: Resources debited when construction is committed.
        conversions: Rules applied by the economy while powered.
    """

    name: str
    desc: str
    thumbnail: str
    energy: float = 0.0
    capacity: dict[ResourceKind, float] = field(default_factory=dict)
    recipe: dict[ResourceKind, float] = field(default_factory=dict)
    conversions: tuple[ConversionRule, ...] = ()


def _uniform_capacity(raw: float, refined: float) -> dict[ResourceKind, float]:
    return {r: (raw if r.is_raw else refined) for r in ResourceKind}


CATALOG: dict[StructureKind, StructureSpec] = {
    StructureKind.PRIMARY_BLOCK: StructureSpec(
        name="Main block",
        desc="Your rescue capsule",
        thumbnail="primary.png",
        energy=10.0,
        capacity=_uniform_capacity(50.0, 20.0),
    ),
    StructureKind.EMPTY_ROOM: StructureSpec(
        name="Empty room",
        desc="Just an empty room",
        thumbnail="room.png",
        recipe={ResourceKind.SILICON: 10.0},
    ),
    StructureKind.FURNACE: StructureSpec(
        name="Furnace",
        desc="Melts ores and ice",
        thumbnail="furnace.png",
        energy=-4.0,
        recipe={ResourceKind.SILICON: 10.0, ResourceKind.STONE: 20.0},
        conversions=(
            ConversionRule((ResourceKind.ICE,), ResourceKind.WATER, rate=0.4),
            ConversionRule(
                (ResourceKind.COPPER,),
                ResourceKind.COPPER_PLATES,
                rate=0.4,
            ),
            ConversionRule(
                (ResourceKind.URANIUM,),
                ResourceKind.URANIUM_RODS,
                rate=0.4,
            ),
        ),
    ),
    StructureKind.GENERATOR: StructureSpec(
        name="Generator",
        desc="Generates power",
        thumbnail="generator.png",
        energy=8.0,
        recipe={ResourceKind.SILICON: 10.0, ResourceKind.COPPER_PLATES: 5.0},
    ),
    StructureKind.CRUSHER: StructureSpec(
        name="Crusher",
        desc="Crushes stones into the silicone dust",
        thumbnail="crusher.png",
        energy=-3.0,
        recipe={ResourceKind.STONE: 15.0},
        conversions=(
            ConversionRule((ResourceKind.STONE,), ResourceKind.SILICON, rate=0.4),
        ),
    ),
    StructureKind.CARGO: StructureSpec(
        name="Cargo",
        desc="Increases your storage capabilities",
        thumbnail="cargo.png",
        energy=-1.0,
        capacity=_uniform_capacity(100.0, 100.0),
        recipe={ResourceKind.SILICON: 15.0},
    ),
    StructureKind.HOOK: StructureSpec(
        name="Hook",
        desc="Automatic hook",
        thumbnail="hook.png",
        energy=-2.0,
        recipe={ResourceKind.SILICON: 5.0, ResourceKind.STONE: 10.0},
    ),
    StructureKind.ENRICHMENT: StructureSpec(
        name="Enrichment station",
        desc="Produces batteries",
        thumbnail="enrichment.png",
        energy=-6.0,
        recipe={ResourceKind.COPPER_PLATES: 10.0, ResourceKind.SILICON: 10.0},
        conversions=(
            ConversionRule(
                (ResourceKind.URANIUM_RODS, ResourceKind.AURELIUM),
                ResourceKind.BATTERIES,
                rate=0.1,
            ),
        ),
    ),
}


def spec_for(kind: StructureKind) -> StructureSpec:
    """Return the static table entry for ``kind``."""
    return CATALOG[kind]
