"""
Batch Calculator - Per-Period Orchestration

Aggregates imported results per project and runs the engine once per
eligible project. A misconfigured project is logged and reported as skipped;
it never aborts the calculation for its siblings.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Union

from .engine import ProfitSharingEngine
from .exceptions import ConfigurationError
from .models import ZERO, ProfitSharingInput, ProfitSharingResult, ProfitSharingRules, to_decimal
from .output import OutputBuilder
from .records import StoredRule, rules_from_record

logger = logging.getLogger(__name__)

INCOME = "INCOME"

SKIP_NO_RULE = "no_rule"
SKIP_CALCULATION_ERROR = "calculation_error"


# =============================================================================
# AGGREGATION
# =============================================================================


@dataclass
class ResultEntry:
    """One imported results line. project_id is None for administrative costs."""

    project_id: Optional[str]
    concept_type: str
    amount: Decimal
    year: int
    month: int

    @classmethod
    def from_dict(cls, data: dict) -> "ResultEntry":
        return cls(
            project_id=data.get("project_id"),
            concept_type=str(data.get("concept_type", "")).upper(),
            amount=to_decimal(data.get("amount", 0), "amount"),
            year=int(data["year"]),
            month=int(data["month"]),
        )


@dataclass
class ProjectTotals:
    income: Decimal = ZERO
    cost: Decimal = ZERO

    @property
    def net_profit(self) -> Decimal:
        return self.income - self.cost


def aggregate_by_project(
    entries: Iterable[ResultEntry], year: int, month: Optional[int] = None
) -> Dict[str, ProjectTotals]:
    """
    Sum income and cost per project for a period.

    INCOME concepts count as income; every other concept type counts as cost.
    month=None aggregates the whole year.
    """
    totals: Dict[str, ProjectTotals] = {}

    for entry in entries:
        if not entry.project_id:
            continue  # Admin costs are not attributed to any project
        if entry.year != year or (month is not None and entry.month != month):
            continue

        project_totals = totals.setdefault(entry.project_id, ProjectTotals())
        if entry.concept_type == INCOME:
            project_totals.income += entry.amount
        else:
            project_totals.cost += entry.amount

    return totals


# =============================================================================
# BATCH REPORT
# =============================================================================


@dataclass
class ProjectRecord:
    """
    A project as read from the catalog, with its configured rule if any.

    A rule read from a payload stays a raw row dict here; it is parsed when
    the project is calculated, so a malformed row only fails its own project.
    """

    project_id: str
    name: str
    applies_profit_sharing: bool = True
    is_active: bool = True
    rule: Union[StoredRule, ProfitSharingRules, dict, None] = None

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectRecord":
        return cls(
            project_id=str(data["project_id"]),
            name=str(data.get("name", "")),
            applies_profit_sharing=data.get("applies_profit_sharing", True),
            is_active=data.get("is_active", True),
            rule=data.get("rule") or None,
        )


@dataclass
class SkippedProject:
    project_id: str
    project_name: str
    reason: str
    error: Optional[str] = None


@dataclass
class BatchReport:
    """Results of a batch run, plus the projects that could not be calculated."""

    results: List[ProfitSharingResult] = field(default_factory=list)
    skipped: List[SkippedProject] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def errored_count(self) -> int:
        return sum(1 for s in self.skipped if s.reason == SKIP_CALCULATION_ERROR)

    @property
    def total_profit(self) -> Decimal:
        return sum((r.net_profit for r in self.results), ZERO)

    @property
    def total_share(self) -> Decimal:
        return sum((r.total_share for r in self.results), ZERO)

    @property
    def client_share(self) -> Decimal:
        """What remains for the client after all shares are paid out."""
        return self.total_profit - self.total_share


# =============================================================================
# ORCHESTRATOR
# =============================================================================


class BatchCalculator:
    """Runs the engine across many projects, isolating per-project failures."""

    def __init__(self, engine: Optional[ProfitSharingEngine] = None):
        self.engine = engine or ProfitSharingEngine()
        self.output_builder = OutputBuilder()

    def calculate_many(self, inputs: Iterable[Union[ProfitSharingInput, dict]]) -> BatchReport:
        """
        Calculate inputs, recording failures instead of raising.

        Raw payload dicts are parsed one at a time, so a malformed input is
        reported as a calculation error for that project only.
        """
        report = BatchReport()
        for item in inputs:
            self._calculate_one(item, report)
        self._log_summary(report)
        return report

    def calculate_for_period(
        self,
        projects: Iterable[ProjectRecord],
        entries: Iterable[ResultEntry],
        year: int,
        month: Optional[int] = None,
        handles_profit_sharing: bool = True,
    ) -> BatchReport:
        """
        Calculate profit sharing for every eligible project in a period.

        Steps:
        1. Company must handle profit sharing (otherwise empty report)
        2. Keep active projects that apply profit sharing
        3. Aggregate income/cost per project for the period
        4. Calculate each project with a configured rule
        """
        report = BatchReport()
        if not handles_profit_sharing:
            logger.info("Company does not handle profit sharing, nothing to calculate")
            return report

        eligible = [p for p in projects if p.applies_profit_sharing and p.is_active]
        if not eligible:
            return report

        totals = aggregate_by_project(entries, year, month)
        period = f"{year}-{month:02d}" if month is not None else str(year)
        logger.info(f"Calculating profit sharing for {len(eligible)} projects, period {period}")

        for project in eligible:
            if project.rule is None:
                logger.info(f"Skipping project {project.name}: no profit sharing rule configured")
                report.skipped.append(SkippedProject(project.project_id, project.name, SKIP_NO_RULE))
                continue

            try:
                rules = self._to_rules(project.rule)
            except ValueError as e:
                self._record_error(report, project.project_id, project.name, e)
                continue

            project_totals = totals.get(project.project_id, ProjectTotals())
            input_data = ProfitSharingInput(
                project_id=project.project_id,
                project_name=project.name,
                total_income=project_totals.income,
                total_cost=project_totals.cost,
                net_profit=project_totals.net_profit,
                rules=rules,
            )
            self._calculate_one(input_data, report)

        self._log_summary(report)
        return report

    def calculate_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Run a batch from raw dictionary input.

        Accepts either prebuilt inputs ({"inputs": [...]}) or a period request
        ({"projects": [...], "results": [...], "year": .., "month": ..}).
        Convenience method for API usage.
        """
        if "inputs" in data:
            report = self.calculate_many(data["inputs"])
        else:
            month = data.get("month")
            report = self.calculate_for_period(
                projects=[ProjectRecord.from_dict(p) for p in data["projects"]],
                entries=[ResultEntry.from_dict(r) for r in data.get("results", [])],
                year=int(data["year"]),
                month=int(month) if month is not None else None,
                handles_profit_sharing=data.get("handles_profit_sharing", True),
            )
        return self.output_builder.build_batch(report)

    def _calculate_one(self, item: Union[ProfitSharingInput, dict], report: BatchReport) -> None:
        try:
            input_data = item if isinstance(item, ProfitSharingInput) else ProfitSharingInput.from_dict(item)
            result = self.engine.calculate(input_data)
        except (ValueError, KeyError, TypeError) as e:
            project_id, project_name = self._identify(item)
            self._record_error(report, project_id, project_name, e)
            return
        report.results.append(result)

    @staticmethod
    def _identify(item: Union[ProfitSharingInput, dict]) -> tuple:
        """Best-effort project id and name, also for payloads that failed to parse."""
        if isinstance(item, ProfitSharingInput):
            return item.project_id, item.project_name
        if not isinstance(item, dict):
            return "", ""
        project_id = item.get("project_id", item.get("projectId", ""))
        project_name = item.get("project_name", item.get("projectName", ""))
        return str(project_id), str(project_name)

    @staticmethod
    def _to_rules(rule: Union[StoredRule, ProfitSharingRules, dict]) -> ProfitSharingRules:
        if isinstance(rule, dict):
            rule = StoredRule.from_dict(rule)
        if isinstance(rule, StoredRule):
            return rules_from_record(rule)
        if not isinstance(rule, ProfitSharingRules):
            raise ConfigurationError(f"rule must be an object, got: {rule!r}")
        return rule

    @staticmethod
    def _record_error(report: BatchReport, project_id: str, project_name: str, error: Exception) -> None:
        logger.error(f"Error calculating profit sharing for {project_name}: {error}")
        report.skipped.append(
            SkippedProject(project_id, project_name, SKIP_CALCULATION_ERROR, error=str(error))
        )

    @staticmethod
    def _log_summary(report: BatchReport) -> None:
        if report.errored_count:
            logger.warning(
                f"Profit sharing batch finished with {report.errored_count} errored projects "
                f"({len(report.results)} calculated, {report.skipped_count} skipped)"
            )
        else:
            logger.info(
                f"Profit sharing batch finished: {len(report.results)} calculated, "
                f"{report.skipped_count} skipped"
            )
