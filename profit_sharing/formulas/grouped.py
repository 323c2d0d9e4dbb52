"""
Grouped Formula

Each configured group receives its own percentage of net profit.
"""

from ..models import ZERO, BreakdownLine, FormulaOutcome, ProfitSharingInput
from .common import NO_PROFIT, fmt_money, share_of, zero_outcome


class GroupedFormula:
    """Independent per-group allocations."""

    def calculate(self, ctx: ProfitSharingInput) -> FormulaOutcome:
        """
        Calculate one share per group.

        Group percentages are not required to total 100%, and nothing bounds
        their sum; callers configuring groups own that constraint.
        """
        groups = ctx.rules.groups
        if not groups:
            return zero_outcome("Sin grupos configurados")

        if ctx.net_profit <= 0:
            return zero_outcome(NO_PROFIT)

        breakdown = []
        details = []
        total = ZERO

        for group in groups:
            group_share = share_of(ctx.net_profit, group.percent_rate)
            total += group_share

            breakdown.append(
                BreakdownLine(
                    description=group.group_name,
                    amount=group_share,
                    percent_of_profit=group.percent_rate,
                )
            )
            details.append(f"{group.group_name}: {fmt_money(group_share)}")

        return FormulaOutcome(
            total_share=total,
            breakdown=breakdown,
            calculation_details=f"Grupos: {', '.join(details)}. Total: {fmt_money(total)}",
        )
