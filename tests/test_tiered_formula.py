"""
Unit Tests for the Tiered Formula

Tests verify bracket allocation against known expected values.
"""

from decimal import Decimal

import pytest

from profit_sharing.formulas.tiered import TieredFormula
from profit_sharing.models import FormulaType, ProfitSharingInput, ProfitSharingRules, TierConfig


def _tier(lower, upper, rate) -> TierConfig:
    return TierConfig(
        min_profit=Decimal(str(lower)),
        max_profit=Decimal(str(upper)) if upper is not None else None,
        percent_rate=Decimal(str(rate)),
    )


def _make_input(net_profit, tiers) -> ProfitSharingInput:
    return ProfitSharingInput(
        project_id="p1",
        project_name="Torre Prisma",
        total_income=Decimal("0"),
        total_cost=Decimal("0"),
        net_profit=Decimal(str(net_profit)),
        rules=ProfitSharingRules(formula_type=FormulaType.TIERED, tiers=tiers),
    )


class TestTieredFormula:
    """Test progressive tier allocation."""

    @pytest.fixture
    def formula(self):
        return TieredFormula()

    @pytest.fixture
    def two_tiers(self):
        return [_tier(0, 50000, 10), _tier(50000, None, 20)]

    def test_profit_spanning_two_tiers(self, formula, two_tiers):
        """$50,000 × 10% + $30,000 × 20% = $11,000"""
        result = formula.calculate(_make_input(80000, two_tiers))

        assert result.total_share == Decimal("11000")
        assert [line.amount for line in result.breakdown] == [Decimal("5000"), Decimal("6000")]

    def test_profit_within_first_tier(self, formula, two_tiers):
        """$30,000 × 10% = $3,000, second tier untouched."""
        result = formula.calculate(_make_input(30000, two_tiers))

        assert result.total_share == Decimal("3000")
        assert len(result.breakdown) == 1

    def test_profit_exactly_at_boundary(self, formula, two_tiers):
        """$50,000 fills the first tier; the second does not apply."""
        result = formula.calculate(_make_input(50000, two_tiers))

        assert result.total_share == Decimal("5000")
        assert len(result.breakdown) == 1

    def test_three_tiers(self, formula):
        """$20,000 × 5% + $20,000 × 8% + $10,000 × 12% = $3,800"""
        tiers = [_tier(0, 20000, 5), _tier(20000, 40000, 8), _tier(40000, None, 12)]
        result = formula.calculate(_make_input(50000, tiers))

        assert result.total_share == Decimal("3800")
        assert len(result.breakdown) == 3

    def test_unsorted_tiers_are_sorted(self, formula):
        tiers = [_tier(50000, None, 20), _tier(0, 50000, 10)]
        result = formula.calculate(_make_input(80000, tiers))

        assert result.total_share == Decimal("11000")
        assert result.breakdown[0].amount == Decimal("5000")

    def test_gap_between_tiers_earns_nothing(self, formula):
        """Profit between $10,000 and $20,000 is outside every tier."""
        tiers = [_tier(0, 10000, 10), _tier(20000, None, 20)]
        result = formula.calculate(_make_input(30000, tiers))

        # $10,000 × 10% + $10,000 × 20% = $3,000
        assert result.total_share == Decimal("3000")

    def test_first_tier_above_profit(self, formula):
        tiers = [_tier(100000, None, 10)]
        result = formula.calculate(_make_input(50000, tiers))

        assert result.total_share == Decimal("0")
        assert len(result.breakdown) == 1
        assert result.breakdown[0].amount == Decimal("0")

    def test_loss_yields_zero(self, formula, two_tiers):
        result = formula.calculate(_make_input(-10000, two_tiers))

        assert result.total_share == Decimal("0")

    def test_empty_tiers_yield_zero_with_explanation(self, formula):
        result = formula.calculate(_make_input(80000, []))

        assert result.total_share == Decimal("0")
        assert len(result.breakdown) == 1
        assert "tramos" in result.breakdown[0].description

    def test_breakdown_sums_to_total(self, formula, two_tiers):
        result = formula.calculate(_make_input(123456.78, two_tiers))

        assert sum(line.amount for line in result.breakdown) == result.total_share

    def test_line_descriptions(self, formula, two_tiers):
        result = formula.calculate(_make_input(80000, two_tiers))

        assert result.breakdown[0].description == "10% de $0 - $50,000"
        assert result.breakdown[1].description == "20% de $50,000 - ∞"
