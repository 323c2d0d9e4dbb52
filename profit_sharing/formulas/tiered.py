"""
Tiered Formula

Splits net profit across ascending profit brackets, each with its own rate.
"""

from ..models import ZERO, BreakdownLine, FormulaOutcome, ProfitSharingInput, TierConfig
from .common import NO_PROFIT, fmt_money, fmt_percent, percent_of, share_of, zero_outcome


class TieredFormula:
    """Progressive brackets over net profit."""

    def calculate(self, ctx: ProfitSharingInput) -> FormulaOutcome:
        """
        Calculate the tiered share.

        Handles:
        - Unsorted tier lists (sorted by min_profit first)
        - Gaps between tiers (profit inside a gap earns nothing)
        - Infinite upper bound on the final tier
        """
        tiers = ctx.rules.tiers
        if not tiers:
            return zero_outcome("Sin tramos configurados")

        net_profit = ctx.net_profit
        if net_profit <= 0:
            return zero_outcome(NO_PROFIT)

        breakdown = []
        details = []
        total = ZERO

        for tier in sorted(tiers, key=lambda t: t.min_profit):
            # Tiers apply only once profit moves past their floor
            if net_profit <= tier.min_profit:
                break

            lower = max(tier.min_profit, ZERO)
            upper = net_profit if tier.max_profit is None else min(net_profit, tier.max_profit)
            applicable = max(ZERO, upper - lower)
            if applicable == 0:
                continue

            tier_share = share_of(applicable, tier.percent_rate)
            total += tier_share

            breakdown.append(
                BreakdownLine(
                    description=self._describe(tier, lower),
                    amount=tier_share,
                    percent_of_profit=percent_of(tier_share, net_profit),
                )
            )
            details.append(f"{fmt_money(applicable)} × {fmt_percent(tier.percent_rate)}%")

        if not breakdown:
            return zero_outcome("Utilidad por debajo del primer tramo")

        return FormulaOutcome(
            total_share=total,
            breakdown=breakdown,
            calculation_details=f"Escalonado: {' + '.join(details)} = {fmt_money(total)}",
        )

    @staticmethod
    def _describe(tier: TierConfig, lower) -> str:
        ceiling = "∞" if tier.max_profit is None else f"${tier.max_profit:,.0f}"
        return f"{fmt_percent(tier.percent_rate)}% de ${lower:,.0f} - {ceiling}"
