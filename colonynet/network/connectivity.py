"""Connectivity — flood fill from anchor cells through adjacent structures.

Results are never cached; callers recompute every tick.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from colonynet.grid.coords import Cell, neighbours

if TYPE_CHECKING:
    from colonynet.grid.map_store import LayeredMapStore, MapLayer


def connected_cells(
    store: LayeredMapStore,
    layer: MapLayer,
    excluded: Cell | None = None,
) -> frozenset[Cell]:
    """Return the non-anchor cells reachable from any anchor.

    The walk starts from every PrimaryBlock on ``layer`` and spreads
    across orthogonally adjacent non-anchor structures.  An anchor
    never acts as a stepping stone for another anchor's network.

    Args:
        store: Map store to read.
        layer: Layer to evaluate.
        excluded: Cell treated as already removed.  Ignored when it is
            an anchor, since anchors cannot be removed.

    Returns:
        Connected non-anchor cells.
    """
    frontier = store.anchors(layer)
    visited: set[Cell] = set()
    if excluded is not None and not _is_anchor(store, excluded, layer):
        visited.add(excluded)

    connected: set[Cell] = set()
    while frontier:
        cell = frontier.pop()
        if cell in visited:
            continue
        visited.add(cell)
        for n in neighbours(cell):
            if n not in visited and store.is_structure(n, layer):
                frontier.append(n)
                connected.add(n)
    return frozenset(connected)


def disconnected_cells(
    store: LayeredMapStore,
    layer: MapLayer,
    excluded: Cell | None = None,
) -> frozenset[Cell]:
    """Return the orphaned non-anchor cells on ``layer``.

    The excluded cell itself is never reported.
    """
    connected = connected_cells(store, layer, excluded)
    return frozenset(
        cell
        for cell, kind in store.cells(layer)
        if not kind.is_anchor and cell != excluded and cell not in connected
    )


def _is_anchor(store: LayeredMapStore, cell: Cell, layer: MapLayer) -> bool:
    kind = store.kind_at(cell, layer)
    return kind is not None and kind.is_anchor
