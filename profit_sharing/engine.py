"""
Profit Sharing Engine - Formula Dispatcher

Selects the formula strategy configured for a project and turns its outcome
into a ProfitSharingResult. Stateless: safe to share across callers.
"""

from typing import Any, Dict, List

from .formulas import (
    DynamicFormula,
    FixedOnlyFormula,
    FixedPlusPercentFormula,
    GroupedFormula,
    PercentSimpleFormula,
    SpecialFormula,
    TieredFormula,
)
from .models import (
    FORMULA_CATALOG,
    FormulaType,
    FormulaTypeInfo,
    ProfitSharingInput,
    ProfitSharingResult,
)
from .output import OutputBuilder


class ProfitSharingEngine:
    """
    Main entry point for profit sharing calculations.

    One strategy instance per FormulaType; construction fails if any formula
    type lacks a strategy, so adding a member to FormulaType without a
    matching strategy is caught immediately.
    """

    def __init__(self):
        self.strategies = {
            FormulaType.FIXED_ONLY: FixedOnlyFormula(),
            FormulaType.PERCENT_SIMPLE: PercentSimpleFormula(),
            FormulaType.FIXED_PLUS_PERCENT: FixedPlusPercentFormula(),
            FormulaType.TIERED: TieredFormula(),
            FormulaType.SPECIAL_FORMULA: SpecialFormula(),
            FormulaType.GROUPED: GroupedFormula(),
            FormulaType.DYNAMIC: DynamicFormula(),
        }
        missing = set(FormulaType) - set(self.strategies)
        if missing:
            raise RuntimeError(f"No strategy registered for: {sorted(m.value for m in missing)}")
        self.output_builder = OutputBuilder()

    def calculate(self, input_data: ProfitSharingInput) -> ProfitSharingResult:
        """
        Calculate the share owed for one project.

        Args:
            input_data: Aggregated income/cost for the period plus the rules

        Returns:
            ProfitSharingResult with total_share and its breakdown

        Raises:
            ConfigurationError: if the formula type is not recognized
        """
        # Raises ConfigurationError for anything outside FormulaType
        formula_type = FormulaType.parse(input_data.rules.formula_type)
        outcome = self.strategies[formula_type].calculate(input_data)

        return ProfitSharingResult(
            project_id=input_data.project_id,
            project_name=input_data.project_name,
            formula_type=formula_type,
            net_profit=input_data.net_profit,
            total_share=outcome.total_share,
            breakdown=outcome.breakdown,
            calculation_details=outcome.calculation_details,
        )

    def calculate_batch(self, inputs: List[ProfitSharingInput]) -> List[ProfitSharingResult]:
        """
        Calculate several projects, failing on the first misconfigured one.

        Use batch.BatchCalculator when one bad project must not stop the rest.
        """
        return [self.calculate(item) for item in inputs]

    def calculate_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Calculate from a raw dictionary input.

        Convenience method for API usage.
        """
        input_data = ProfitSharingInput.from_dict(data)
        result = self.calculate(input_data)
        return self.output_builder.build(result)

    @staticmethod
    def get_formula_types() -> List[FormulaTypeInfo]:
        """Available formula types with their labels and descriptions."""
        return list(FORMULA_CATALOG)


_default_engine = ProfitSharingEngine()


def calculate(input_data: ProfitSharingInput) -> ProfitSharingResult:
    """Calculate profit sharing for a single project."""
    return _default_engine.calculate(input_data)


def get_formula_types() -> List[FormulaTypeInfo]:
    return ProfitSharingEngine.get_formula_types()
