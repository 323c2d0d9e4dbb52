"""
Output Builder

Constructs API/report payloads from calculation results. This is the only
place money is rounded: the engine works in full precision.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from .models import BreakdownLine, ProfitSharingResult


def quantize_money(value: Decimal) -> Decimal:
    """Round to 2 decimal places (ROUND_HALF_UP)."""
    return value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return float(quantize_money(value))


def _to_percent(value: Optional[Decimal]) -> Optional[float]:
    if value is None:
        return None
    return float(value.quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP))


class OutputBuilder:
    """Builds serializable output for display and export layers."""

    def build(self, result: ProfitSharingResult) -> dict:
        """Construct the payload for a single project result."""
        return {
            "project_id": result.project_id,
            "project_name": result.project_name,
            "formula_type": result.formula_type.value,
            "net_profit": to_money(result.net_profit),
            "total_share": to_money(result.total_share),
            "breakdown": [self._build_line(line) for line in result.breakdown],
            "calculation_details": result.calculation_details,
        }

    def build_batch(self, report) -> dict:
        """
        Construct the payload for a batch.BatchReport.

        Skipped projects are listed with their reason so administrators can
        see which projects are missing from the report and why.
        """
        return {
            "results": [self.build(result) for result in report.results],
            "summary": {
                "total_profit": to_money(report.total_profit),
                "total_share": to_money(report.total_share),
                "client_share": to_money(report.client_share),
                "projects_calculated": len(report.results),
                "projects_skipped": report.skipped_count,
                "projects_errored": report.errored_count,
            },
            "skipped": [
                {
                    "project_id": skipped.project_id,
                    "project_name": skipped.project_name,
                    "reason": skipped.reason,
                    "error": skipped.error,
                }
                for skipped in report.skipped
            ],
        }

    def _build_line(self, line: BreakdownLine) -> dict:
        row = {
            "description": line.description,
            "amount": to_money(line.amount),
        }
        if line.percent_of_profit is not None:
            row["percent_of_profit"] = _to_percent(line.percent_of_profit)
        return row
