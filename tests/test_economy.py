"""Tests for colonynet.economy — ledger, capacity clamp and conversions."""

import pytest

from colonynet.economy.conversion import apply_conversion, run_conversions
from colonynet.economy.ledger import EconomyLedger
from colonynet.network.structures import (
    CATALOG,
    ConversionRule,
    ResourceKind,
    StructureKind,
)

_ICE_TO_WATER = ConversionRule((ResourceKind.ICE,), ResourceKind.WATER, rate=0.4)


class TestCatalog:
    """Tests for the static structure table."""

    def test_every_kind_has_an_entry(self) -> None:
        """The catalog covers every structure kind."""
        assert set(CATALOG) == set(StructureKind)

    def test_only_the_anchor_is_an_anchor(self) -> None:
        """PrimaryBlock is the only anchor kind."""
        assert [k for k in StructureKind if k.is_anchor] == [StructureKind.PRIMARY_BLOCK]

    def test_raw_and_refined(self) -> None:
        """Raw and refined resources are told apart."""
        assert ResourceKind.STONE.is_raw
        assert not ResourceKind.BATTERIES.is_raw


class TestRecompute:
    """Tests for energy and capacity rebuild."""

    def test_energy_totals(self) -> None:
        """Generation and consumption are summed separately."""
        ledger = EconomyLedger()
        ledger.recompute(
            [StructureKind.PRIMARY_BLOCK, StructureKind.GENERATOR, StructureKind.FURNACE],
        )
        assert ledger.energy_available == pytest.approx(18.0)
        assert ledger.energy_in_use == pytest.approx(4.0)

    def test_recompute_is_full_rebuild(self) -> None:
        """A recompute forgets structures from the previous one."""
        ledger = EconomyLedger()
        ledger.recompute([StructureKind.PRIMARY_BLOCK, StructureKind.CARGO])
        ledger.recompute([StructureKind.PRIMARY_BLOCK])
        assert ledger.energy_in_use == 0.0
        assert ledger.count(ResourceKind.STONE) == (0.0, 50.0)

    def test_capacity_sums(self) -> None:
        """Capacities from several structures add up."""
        ledger = EconomyLedger()
        ledger.recompute([StructureKind.PRIMARY_BLOCK, StructureKind.CARGO])
        assert ledger.capacity[ResourceKind.STONE] == pytest.approx(150.0)
        assert ledger.capacity[ResourceKind.WATER] == pytest.approx(120.0)

    def test_shrinking_capacity_truncates(self) -> None:
        """Losing storage truncates stored amounts."""
        ledger = EconomyLedger()
        ledger.recompute([StructureKind.PRIMARY_BLOCK, StructureKind.CARGO])
        ledger.harvest(ResourceKind.STONE, 120.0)
        ledger.recompute([StructureKind.PRIMARY_BLOCK])
        assert ledger.current[ResourceKind.STONE] == pytest.approx(50.0)

    def test_empty_population(self) -> None:
        """No structures means no energy and no capacity."""
        ledger = EconomyLedger()
        ledger.recompute([])
        assert ledger.energy_available == 0.0
        assert all(cap == 0.0 for cap in ledger.capacity.values())


class TestEnergyRatio:
    """Tests for the power-bar ratio."""

    def test_zero_generation_is_zero(self) -> None:
        """A colony with no generation reports ratio 0."""
        ledger = EconomyLedger()
        ledger.recompute([StructureKind.FURNACE])
        assert ledger.energy_ratio == 0.0

    def test_spare_fraction(self) -> None:
        """The ratio is spare energy over generation."""
        ledger = EconomyLedger()
        ledger.recompute([StructureKind.PRIMARY_BLOCK, StructureKind.FURNACE])
        assert ledger.energy_ratio == pytest.approx(0.6)

    def test_overdraw_clamps_to_zero(self) -> None:
        """Consumption above generation clamps the ratio to 0."""
        ledger = EconomyLedger()
        ledger.recompute(
            [StructureKind.PRIMARY_BLOCK]
            + [StructureKind.ENRICHMENT] * 2,
        )
        assert ledger.energy_ratio == 0.0


class TestHarvest:
    """Tests for clamped deposits and withdrawals."""

    def test_huge_debit_then_zero(self, ledger: EconomyLedger) -> None:
        """A huge debit floors at zero and stays there."""
        ledger.harvest(ResourceKind.ICE, 5.0)
        ledger.harvest(ResourceKind.ICE, -1e12)
        ledger.harvest(ResourceKind.ICE, 0.0)
        assert ledger.current[ResourceKind.ICE] == 0.0

    def test_credit_clamps_to_capacity(self, ledger: EconomyLedger) -> None:
        """Credits above capacity are cut off."""
        ledger.harvest(ResourceKind.ICE, 1e12)
        assert ledger.count(ResourceKind.ICE) == (50.0, 50.0)

    def test_repeated_clamp_is_stable(self, ledger: EconomyLedger) -> None:
        """Clamping an in-range amount changes nothing."""
        ledger.harvest(ResourceKind.WATER, 15.0)
        for _ in range(3):
            ledger.clamp()
        assert ledger.current[ResourceKind.WATER] == pytest.approx(15.0)

    def test_afford_and_pay(self, ledger: EconomyLedger) -> None:
        """Paying a recipe debits every entry."""
        recipe = CATALOG[StructureKind.FURNACE].recipe
        assert not ledger.can_afford(recipe)
        ledger.harvest(ResourceKind.SILICON, 12.0)
        ledger.harvest(ResourceKind.STONE, 20.0)
        assert ledger.can_afford(recipe)
        ledger.pay(recipe)
        assert ledger.current[ResourceKind.SILICON] == pytest.approx(2.0)
        assert ledger.current[ResourceKind.STONE] == pytest.approx(0.0)


class TestConversion:
    """Tests for conservation in conversion flows."""

    def test_input_bound(self, ledger: EconomyLedger) -> None:
        """With 0.3 Ice and 0.4/s throughput, all 0.3 converts."""
        ledger.harvest(ResourceKind.ICE, 0.3)
        consumed = apply_conversion(ledger, _ICE_TO_WATER, delta_time=1.0)
        assert consumed == pytest.approx(0.3)
        assert ledger.current[ResourceKind.ICE] == pytest.approx(0.0)
        assert ledger.current[ResourceKind.WATER] == pytest.approx(0.3)

    def test_rate_bound(self, ledger: EconomyLedger) -> None:
        """Throughput limits the amount converted per tick."""
        ledger.harvest(ResourceKind.ICE, 10.0)
        apply_conversion(ledger, _ICE_TO_WATER, delta_time=1.0)
        assert ledger.current[ResourceKind.ICE] == pytest.approx(9.6)
        assert ledger.current[ResourceKind.WATER] == pytest.approx(0.4)

    def test_output_capacity_scales_input(self, ledger: EconomyLedger) -> None:
        """A nearly full output draws only what fits."""
        rule = ConversionRule((ResourceKind.ICE,), ResourceKind.WATER, rate=5.0, ratio=2.0)
        ledger.harvest(ResourceKind.ICE, 10.0)
        ledger.harvest(ResourceKind.WATER, 19.0)
        consumed = apply_conversion(ledger, rule, delta_time=1.0)
        assert consumed == pytest.approx(0.5)
        assert ledger.current[ResourceKind.ICE] == pytest.approx(9.5)
        assert ledger.current[ResourceKind.WATER] == pytest.approx(20.0)

    def test_full_output_converts_nothing(self, ledger: EconomyLedger) -> None:
        """A full output store stops the conversion."""
        ledger.harvest(ResourceKind.ICE, 10.0)
        ledger.harvest(ResourceKind.WATER, 20.0)
        assert apply_conversion(ledger, _ICE_TO_WATER, delta_time=1.0) == 0.0
        assert ledger.current[ResourceKind.ICE] == pytest.approx(10.0)

    def test_multi_input_bound_by_scarcest(self, ledger: EconomyLedger) -> None:
        """Multi-input rules are bounded by the scarcest input."""
        rule = CATALOG[StructureKind.ENRICHMENT].conversions[0]
        ledger.harvest(ResourceKind.URANIUM_RODS, 5.0)
        ledger.harvest(ResourceKind.AURELIUM, 0.05)
        consumed = apply_conversion(ledger, rule, delta_time=1.0)
        assert consumed == pytest.approx(0.05)
        assert ledger.current[ResourceKind.URANIUM_RODS] == pytest.approx(4.95)
        assert ledger.current[ResourceKind.AURELIUM] == pytest.approx(0.0)
        assert ledger.current[ResourceKind.BATTERIES] == pytest.approx(0.05)

    def test_brownout_stops_conversions(self) -> None:
        """Nothing converts while the colony has no power."""
        ledger = EconomyLedger()
        population = [StructureKind.FURNACE]
        ledger.recompute(population + [StructureKind.CARGO])
        ledger.harvest(ResourceKind.ICE, 5.0)
        run_conversions(ledger, population, delta_time=1.0)
        assert ledger.current[ResourceKind.ICE] == pytest.approx(5.0)

    def test_same_kind_structures_add_up(self) -> None:
        """Two converters of one kind each run their rule."""
        ledger = EconomyLedger()
        population = [
            StructureKind.PRIMARY_BLOCK,
            StructureKind.CRUSHER,
            StructureKind.CRUSHER,
        ]
        ledger.recompute(population)
        ledger.harvest(ResourceKind.STONE, 10.0)
        run_conversions(ledger, population, delta_time=1.0)
        assert ledger.current[ResourceKind.STONE] == pytest.approx(9.2)
        assert ledger.current[ResourceKind.SILICON] == pytest.approx(0.8)
