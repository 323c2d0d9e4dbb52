"""
Special Formula

Percentage of profit gated by a minimum profit and limited by a maximum share.
"""

from ..models import ZERO, BreakdownLine, FormulaOutcome, ProfitSharingInput
from .common import NO_PROFIT, fmt_money, fmt_percent, percent_of, share_of, zero_outcome


class SpecialFormula:
    """PERCENT_SIMPLE with a minimum-profit gate and a cap."""

    def calculate(self, ctx: ProfitSharingInput) -> FormulaOutcome:
        """
        Calculate the capped share.

        - Profit at or below minimum_profit: no share
        - Otherwise: percent_rate of net profit
        - If that exceeds maximum_share, the share is truncated to the cap and
          a separate adjustment line records the amount removed
        """
        rules = ctx.rules
        minimum = rules.minimum

        # A zero or negative minimum still blocks non-positive profit
        if ctx.net_profit <= max(minimum, ZERO):
            if minimum > 0:
                return zero_outcome(f"Utilidad menor o igual al mínimo ({fmt_money(minimum)})")
            return zero_outcome(NO_PROFIT)

        base = share_of(ctx.net_profit, rules.rate)
        breakdown = [
            BreakdownLine(
                description=f"{fmt_percent(rules.rate)}% sobre utilidad",
                amount=base,
                percent_of_profit=rules.rate,
            )
        ]
        details = f"{fmt_percent(rules.rate)}% de {fmt_money(ctx.net_profit)} = {fmt_money(base)}"

        cap = rules.cap
        if cap is not None:
            cap = max(cap, ZERO)  # Negative caps clamp to zero
        if cap is None or base <= cap:
            return FormulaOutcome(total_share=base, breakdown=breakdown, calculation_details=details)

        excess = base - cap
        breakdown.append(
            BreakdownLine(
                description=f"Ajuste por tope máximo ({fmt_money(cap)})",
                amount=-excess,
                percent_of_profit=percent_of(-excess, ctx.net_profit),
            )
        )
        return FormulaOutcome(
            total_share=cap,
            breakdown=breakdown,
            calculation_details=f"{details} (tope: {fmt_money(cap)})",
        )
