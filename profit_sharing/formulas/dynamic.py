"""
Dynamic Formula

Flat base amount, plus a percentage of the profit above a threshold.
"""

from ..models import BreakdownLine, FormulaOutcome, ProfitSharingInput
from .common import NO_PROFIT, fmt_money, fmt_percent, percent_of, share_of, zero_outcome


class DynamicFormula:
    """Base amount with a threshold-triggered increment."""

    def calculate(self, ctx: ProfitSharingInput) -> FormulaOutcome:
        """
        Calculate the dynamic share.

        - No profit: no share (the base amount is withheld too)
        - Profit up to increment_threshold: base_amount
        - Above it: base_amount + increment_percent of the excess
        """
        rules = ctx.rules
        net_profit = ctx.net_profit

        if net_profit <= 0:
            return zero_outcome(NO_PROFIT)

        base = rules.base
        threshold = rules.threshold
        breakdown = [
            BreakdownLine(
                description="Monto base",
                amount=base,
                percent_of_profit=percent_of(base, net_profit),
            )
        ]

        if net_profit <= threshold:
            return FormulaOutcome(
                total_share=base,
                breakdown=breakdown,
                calculation_details=(
                    f"Base: {fmt_money(base)} (utilidad {fmt_money(net_profit)} "
                    f"no supera el umbral {fmt_money(threshold)})"
                ),
            )

        excess = net_profit - threshold
        increment = share_of(excess, rules.increment_rate)
        breakdown.append(
            BreakdownLine(
                description=f"Incremento {fmt_percent(rules.increment_rate)}% sobre excedente de {fmt_money(threshold)}",
                amount=increment,
                percent_of_profit=percent_of(increment, net_profit),
            )
        )
        total = base + increment

        return FormulaOutcome(
            total_share=total,
            breakdown=breakdown,
            calculation_details=(
                f"Base: {fmt_money(base)} + {fmt_percent(rules.increment_rate)}% de "
                f"{fmt_money(excess)} = {fmt_money(total)}"
            ),
        )
