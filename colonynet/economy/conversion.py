"""Conversion flows — smelting, crushing and enrichment.

Each converting structure draws its inputs from the shared ledger and
deposits its output there.  Structures run one after another in the
order they are given, re-reading the pool each time; nothing is
reserved or prioritised.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from colonynet.network.structures import StructureKind, spec_for

if TYPE_CHECKING:
    from colonynet.economy.ledger import EconomyLedger
    from colonynet.network.structures import ConversionRule


def apply_conversion(
    ledger: EconomyLedger,
    rule: ConversionRule,
    delta_time: float,
) -> float:
    """Run one conversion rule for ``delta_time`` seconds.

    The converted amount is bounded by the rule's throughput and by the
    scarcest input.  If the output would overflow storage, the input
    draw is scaled down until the output exactly fills it, so nothing
    is consumed without being produced.

    Args:
        ledger: Shared resource pool.
        rule: Conversion to apply.
        delta_time: Seconds elapsed this tick.

    Returns:
        Input units consumed from each input kind.
    """
    if rule.ratio <= 0 or delta_time <= 0:
        return 0.0

    amount = min(
        rule.rate * delta_time,
        min(ledger.current[r] for r in rule.inputs),
    )
    produced = amount * rule.ratio
    room = ledger.free_capacity(rule.output)
    if produced > room:
        produced = room
        amount = produced / rule.ratio

    if amount <= 0:
        return 0.0

    for resource in rule.inputs:
        ledger.harvest(resource, -amount)
    ledger.harvest(rule.output, produced)
    return amount


def run_conversions(
    ledger: EconomyLedger,
    population: Iterable[StructureKind],
    delta_time: float,
) -> None:
    """Apply every conversion rule of every contributing structure.

    Nothing runs while the colony is browned out (energy ratio 0).

    Args:
        ledger: Shared resource pool.
        population: Kinds of every contributing structure.
        delta_time: Seconds elapsed this tick.
    """
    if ledger.energy_ratio <= 0:
        return
    for kind in population:
        for rule in spec_for(kind).conversions:
            apply_conversion(ledger, rule, delta_time)
