"""
Simple Percentage Formula
"""

from ..models import BreakdownLine, FormulaOutcome, ProfitSharingInput
from .common import fmt_money, fmt_percent, share_of


class PercentSimpleFormula:
    """Percentage of net profit; losses yield no share."""

    def calculate(self, ctx: ProfitSharingInput) -> FormulaOutcome:
        rate = ctx.rules.rate
        total = share_of(ctx.positive_profit, rate)

        return FormulaOutcome(
            total_share=total,
            breakdown=[
                BreakdownLine(
                    description=f"{fmt_percent(rate)}% sobre utilidad",
                    amount=total,
                    percent_of_profit=rate if ctx.net_profit > 0 else None,
                )
            ],
            calculation_details=f"{fmt_percent(rate)}% de {fmt_money(ctx.net_profit)} = {fmt_money(total)}",
        )
