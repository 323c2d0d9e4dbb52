"""
Fixed Amount Formulas

FIXED_ONLY and FIXED_PLUS_PERCENT.
"""

from ..models import ZERO, BreakdownLine, FormulaOutcome, ProfitSharingInput
from .common import fmt_money, fmt_percent, percent_of, share_of


class FixedOnlyFormula:
    """Flat share that does not depend on the project's profit."""

    def calculate(self, ctx: ProfitSharingInput) -> FormulaOutcome:
        fixed = ctx.rules.fixed

        return FormulaOutcome(
            total_share=fixed,
            breakdown=[
                BreakdownLine(
                    description="Monto fijo",
                    amount=fixed,
                    percent_of_profit=percent_of(fixed, ctx.net_profit),
                )
            ],
            calculation_details=f"Monto fijo: {fmt_money(fixed)}",
        )


class FixedPlusPercentFormula:
    """Fixed amount plus a percentage of net profit."""

    def calculate(self, ctx: ProfitSharingInput) -> FormulaOutcome:
        """
        Both components apply only when there is profit.

        With zero or negative profit the fixed part is withheld as well, so a
        loss-making project never generates a share.
        """
        rules = ctx.rules
        has_profit = ctx.net_profit > 0

        fixed_part = rules.fixed if has_profit else ZERO
        percent_part = share_of(ctx.positive_profit, rules.rate)
        total = fixed_part + percent_part

        details = (
            f"Fijo: {fmt_money(rules.fixed)} + {fmt_percent(rules.rate)}% de "
            f"{fmt_money(ctx.net_profit)} = {fmt_money(total)}"
        )
        if not has_profit:
            details += " (No aplica sin utilidad)"

        return FormulaOutcome(
            total_share=total,
            breakdown=[
                BreakdownLine(description="Monto fijo", amount=fixed_part),
                BreakdownLine(
                    description=f"{fmt_percent(rules.rate)}% sobre utilidad",
                    amount=percent_part,
                    percent_of_profit=rules.rate if has_profit else None,
                ),
            ],
            calculation_details=details,
        )
