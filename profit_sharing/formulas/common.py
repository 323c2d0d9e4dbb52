"""
Shared helpers for formula strategies.

Arithmetic stays in full Decimal precision here; rounding happens only when
results are serialized (see output.to_money).
"""

from decimal import Decimal

from ..models import HUNDRED, ZERO, BreakdownLine, FormulaOutcome

NO_PROFIT = "Sin utilidad"


def share_of(amount: Decimal, percent: Decimal) -> Decimal:
    """Apply a percentage expressed in [0, 100] to an amount."""
    return amount * percent / HUNDRED


def percent_of(amount: Decimal, net_profit: Decimal) -> Decimal | None:
    """What percentage of net profit an amount represents, if profit is positive."""
    if net_profit <= 0:
        return None
    return amount / net_profit * HUNDRED


def fmt_money(value: Decimal) -> str:
    """Format a number as currency string for descriptions."""
    return f"${value:,.2f}"


def fmt_percent(value: Decimal) -> str:
    """Format a percentage without trailing zeros (10.00 -> 10, 12.50 -> 12.5)."""
    return f"{value.normalize():f}"


def zero_outcome(reason: str) -> FormulaOutcome:
    """A zero share explained by a single breakdown line."""
    return FormulaOutcome(
        total_share=ZERO,
        breakdown=[BreakdownLine(description=reason, amount=ZERO)],
        calculation_details=reason,
    )
