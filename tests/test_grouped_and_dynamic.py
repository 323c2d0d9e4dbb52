"""
Unit Tests for Grouped and Dynamic Formulas
"""

from decimal import Decimal

import pytest

from profit_sharing.formulas.dynamic import DynamicFormula
from profit_sharing.formulas.grouped import GroupedFormula
from profit_sharing.models import FormulaType, GroupConfig, ProfitSharingInput, ProfitSharingRules


def _make_input(net_profit, **rules) -> ProfitSharingInput:
    return ProfitSharingInput(
        project_id="p1",
        project_name="Torre Prisma",
        total_income=Decimal("0"),
        total_cost=Decimal("0"),
        net_profit=Decimal(str(net_profit)),
        rules=ProfitSharingRules(**rules),
    )


class TestGroupedFormula:
    """Each group gets its own percentage of net profit."""

    @pytest.fixture
    def formula(self):
        return GroupedFormula()

    @pytest.fixture
    def groups(self):
        return [
            GroupConfig(group_name="A", percent_rate=Decimal("10")),
            GroupConfig(group_name="B", percent_rate=Decimal("5")),
        ]

    def test_one_line_per_group(self, formula, groups):
        """$200,000: A gets 10% = $20,000, B gets 5% = $10,000."""
        result = formula.calculate(_make_input(200000, formula_type=FormulaType.GROUPED, groups=groups))

        assert [line.description for line in result.breakdown] == ["A", "B"]
        assert [line.amount for line in result.breakdown] == [Decimal("20000"), Decimal("10000")]
        assert result.total_share == Decimal("30000")

    def test_group_percentages_may_exceed_100(self, formula):
        groups = [
            GroupConfig(group_name="A", percent_rate=Decimal("80")),
            GroupConfig(group_name="B", percent_rate=Decimal("40")),
        ]
        result = formula.calculate(_make_input(1000, formula_type=FormulaType.GROUPED, groups=groups))

        assert result.total_share == Decimal("1200")

    def test_loss_yields_zero(self, formula, groups):
        result = formula.calculate(_make_input(-5000, formula_type=FormulaType.GROUPED, groups=groups))

        assert result.total_share == Decimal("0")

    def test_empty_groups_yield_zero_with_explanation(self, formula):
        result = formula.calculate(_make_input(200000, formula_type=FormulaType.GROUPED))

        assert result.total_share == Decimal("0")
        assert len(result.breakdown) == 1
        assert "grupos" in result.breakdown[0].description


class TestDynamicFormula:
    """Base amount plus an increment above a threshold."""

    @pytest.fixture
    def formula(self):
        return DynamicFormula()

    def _rules(self, **overrides):
        rules = dict(
            formula_type=FormulaType.DYNAMIC,
            base_amount=Decimal("1000"),
            increment_threshold=Decimal("50000"),
            increment_percent=Decimal("15"),
        )
        rules.update(overrides)
        return rules

    def test_above_threshold(self, formula):
        """$1,000 + ($80,000 - $50,000) × 15% = $5,500"""
        result = formula.calculate(_make_input(80000, **self._rules()))

        assert result.total_share == Decimal("5500")
        assert len(result.breakdown) == 2
        assert result.breakdown[0].description == "Monto base"
        assert result.breakdown[1].amount == Decimal("4500")

    def test_at_threshold_pays_base_only(self, formula):
        result = formula.calculate(_make_input(50000, **self._rules()))

        assert result.total_share == Decimal("1000")
        assert len(result.breakdown) == 1

    def test_below_threshold_pays_base_only(self, formula):
        result = formula.calculate(_make_input(20000, **self._rules()))

        assert result.total_share == Decimal("1000")

    def test_loss_yields_zero(self, formula):
        result = formula.calculate(_make_input(-20000, **self._rules()))

        assert result.total_share == Decimal("0")

    def test_missing_threshold_is_zero(self, formula):
        """Without a threshold the increment applies to all profit."""
        result = formula.calculate(_make_input(10000, **self._rules(increment_threshold=None)))

        # $1,000 + $10,000 × 15%
        assert result.total_share == Decimal("2500")

    def test_breakdown_sums_to_total(self, formula):
        result = formula.calculate(_make_input(98765.43, **self._rules()))

        assert sum(line.amount for line in result.breakdown) == result.total_share
