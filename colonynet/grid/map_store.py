"""MapStore — layered placement of structures on the ROOM grid.

The Main layer is the authoritative colony.  The Build layer is a
scratch copy rebuilt from Main every tick and then mutated to answer
"what if this cell were gone?" questions without touching Main.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass, field
from enum import Enum, auto

from colonynet.grid.coords import Cell, neighbours
from colonynet.network.structures import StructureKind

# Inverted box reported while no layer holds any cell
_EMPTY_MIN: Cell = (2**31 - 1, 2**31 - 1)
_EMPTY_MAX: Cell = (-(2**31), -(2**31))


class MapLayer(Enum):
    """Parallel placement universes."""

    MAIN = auto()
    BUILD = auto()


@dataclass
class LayeredMapStore:
    """Per-layer mapping from cell to structure kind.

    Attributes:
        layers: One ``cell -> kind`` dict per MapLayer.
        bounds_min: Lower corner of the box around every placed cell.
        bounds_max: Upper corner of the same box.
    """

    layers: dict[MapLayer, dict[Cell, StructureKind]] = field(
        init=False,
        repr=False,
    )
    bounds_min: Cell = field(init=False, default=_EMPTY_MIN)
    bounds_max: Cell = field(init=False, default=_EMPTY_MAX)

    def __post_init__(self) -> None:
        """Start with every layer empty."""
        self.layers = {layer: {} for layer in MapLayer}

    def place(
        self,
        cell: Cell,
        kind: StructureKind,
        layer: MapLayer = MapLayer.MAIN,
    ) -> None:
        """Put ``kind`` at ``cell``, overwriting whatever was there.

        Validity is the caller's concern; see ``is_available``.

        Args:
            cell: Target grid address.
            kind: Structure kind to place.
            layer: Layer to mutate.
        """
        self.layers[layer][cell] = kind
        self._recalculate_bounds()

    def remove(self, cell: Cell, layer: MapLayer) -> None:
        """Delete the mapping at ``cell``; no-op when absent."""
        self.layers[layer].pop(cell, None)
        self._recalculate_bounds()

    def remove_structure(self, cell: Cell, layer: MapLayer) -> bool:
        """Remove a non-anchor structure at ``cell``.

        Anchors are never removed through this path.

        Returns:
            True if something was removed.
        """
        if not self.is_structure(cell, layer):
            return False
        self.remove(cell, layer)
        return True

    def sync_preview_from_main(self) -> None:
        """Overwrite the Build layer with a copy of Main."""
        self.layers[MapLayer.BUILD] = dict(self.layers[MapLayer.MAIN])
        self._recalculate_bounds()

    def is_available(
        self,
        cell: Cell,
        kind: StructureKind,
        doomed: Collection[Cell] = (),
    ) -> bool:
        """Return True if ``kind`` may be built at ``cell`` on Main.

        Empty rooms grow the colony outward: the cell must be free and
        touch an occupied cell.  Every other kind fills an existing
        empty room.

        Args:
            cell: Candidate grid address.
            kind: Structure kind the caller wants to place.
            doomed: Cells being torn down.  They can neither be built on
                nor grown from.
        """
        if cell in doomed:
            return False
        main = self.layers[MapLayer.MAIN]
        if kind is StructureKind.EMPTY_ROOM:
            return cell not in main and any(
                n in main and n not in doomed for n in neighbours(cell)
            )
        return main.get(cell) is StructureKind.EMPTY_ROOM

    def contains(self, cell: Cell, layer: MapLayer) -> bool:
        """Return True if any structure occupies ``cell`` on ``layer``."""
        return cell in self.layers[layer]

    def kind_at(self, cell: Cell, layer: MapLayer) -> StructureKind | None:
        """Return the kind at ``cell`` on ``layer``, or None."""
        return self.layers[layer].get(cell)

    def is_structure(self, cell: Cell, layer: MapLayer) -> bool:
        """Return True if ``cell`` holds a non-anchor structure."""
        kind = self.layers[layer].get(cell)
        return kind is not None and not kind.is_anchor

    def anchors(self, layer: MapLayer = MapLayer.MAIN) -> list[Cell]:
        """Return every PrimaryBlock cell on ``layer``."""
        return [c for c, k in self.layers[layer].items() if k.is_anchor]

    def cells(
        self,
        layer: MapLayer = MapLayer.MAIN,
    ) -> list[tuple[Cell, StructureKind]]:
        """Return a snapshot of ``(cell, kind)`` pairs on ``layer``."""
        return list(self.layers[layer].items())

    def bounding_box(self) -> tuple[Cell, Cell]:
        """Return ``(min, max)`` corners; inverted when the store is empty."""
        return (self.bounds_min, self.bounds_max)

    def _recalculate_bounds(self) -> None:
        min_x, min_y = _EMPTY_MIN
        max_x, max_y = _EMPTY_MAX
        for layer in self.layers.values():
            for x, y in layer:
                min_x, min_y = min(min_x, x), min(min_y, y)
                max_x, max_y = max(max_x, x), max(max_y, y)
        self.bounds_min = (min_x, min_y)
        self.bounds_max = (max_x, max_y)
