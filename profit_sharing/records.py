"""
Stored Rule Records

The relational store keeps one profit_sharing_rules row per project, with a
handful of generic columns (percent_1, percent_2, threshold_1,
dynamic_increment) whose meaning depends on the formula type. This module
packs engine rules into that row shape and unpacks them again.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from .exceptions import ConfigurationError
from .models import (
    ZERO,
    FormulaType,
    GroupConfig,
    ProfitSharingRules,
    TierConfig,
    optional_decimal,
)


@dataclass
class StoredRule:
    """A profit_sharing_rules row as read from the database."""

    formula_type: str
    fixed_amount: Decimal | None = None
    percent_1: Decimal | None = None
    percent_2: Decimal | None = None
    threshold_1: Decimal | None = None
    dynamic_increment: Decimal | None = None
    minimum_profit: Decimal | None = None
    groups: list[dict] = field(default_factory=list)
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "StoredRule":
        return cls(
            formula_type=data.get("formula_type") or data.get("formulaType"),
            fixed_amount=optional_decimal(data.get("fixed_amount"), "fixed_amount"),
            percent_1=optional_decimal(data.get("percent_1", data.get("percent1")), "percent_1"),
            percent_2=optional_decimal(data.get("percent_2", data.get("percent2")), "percent_2"),
            threshold_1=optional_decimal(data.get("threshold_1", data.get("threshold1")), "threshold_1"),
            dynamic_increment=optional_decimal(
                data.get("dynamic_increment", data.get("dynamicIncrement")), "dynamic_increment"
            ),
            minimum_profit=optional_decimal(data.get("minimum_profit"), "minimum_profit"),
            groups=list(data.get("groups") or []),
            notes=data.get("notes"),
        )


def rules_from_record(record: StoredRule) -> ProfitSharingRules:
    """Convert a stored row to engine rules."""
    formula_type = FormulaType.parse(record.formula_type)

    rules = ProfitSharingRules(
        formula_type=formula_type,
        fixed_amount=record.fixed_amount,
        percent_rate=record.percent_1,
        percent2=record.percent_2,
    )

    if formula_type == FormulaType.TIERED:
        if record.threshold_1 is not None:
            rules.tiers = [
                TierConfig(min_profit=ZERO, max_profit=record.threshold_1, percent_rate=record.percent_1 or ZERO),
                TierConfig(min_profit=record.threshold_1, max_profit=None, percent_rate=record.percent_2 or ZERO),
            ]
        elif record.percent_1 is not None:
            # Single open-ended tier
            rules.tiers = [TierConfig(min_profit=ZERO, max_profit=None, percent_rate=record.percent_1)]

    elif formula_type == FormulaType.SPECIAL_FORMULA:
        rules.maximum_share = record.dynamic_increment
        rules.minimum_profit = record.minimum_profit

    elif formula_type == FormulaType.GROUPED:
        rules.groups = [GroupConfig.from_dict(g) for g in record.groups]

    elif formula_type == FormulaType.DYNAMIC:
        rules.base_amount = record.fixed_amount
        rules.increment_percent = record.percent_1
        rules.increment_threshold = record.threshold_1

    return rules


def record_from_rules(rules: ProfitSharingRules) -> StoredRule:
    """
    Pack engine rules into the stored row shape.

    Raises ConfigurationError when the rules cannot be represented: the row
    holds at most two tiers, the first starting at zero.
    """
    formula_type = FormulaType.parse(rules.formula_type)
    record = StoredRule(formula_type=formula_type.value)

    if formula_type == FormulaType.TIERED:
        tiers = sorted(rules.tiers, key=lambda t: t.min_profit)
        if len(tiers) > 2:
            raise ConfigurationError(f"Stored rules hold at most 2 tiers, got: {len(tiers)}")
        if tiers:
            first = tiers[0]
            if first.min_profit != 0:
                raise ConfigurationError(f"First tier must start at 0, got: {first.min_profit}")
            record.percent_1 = first.percent_rate
            record.threshold_1 = first.max_profit
        if len(tiers) == 2:
            if first.max_profit is None or tiers[1].min_profit != first.max_profit:
                raise ConfigurationError("Second tier must start where the first tier ends")
            record.percent_2 = tiers[1].percent_rate
        elif rules.percent2 is not None:
            record.percent_2 = rules.percent2

    elif formula_type == FormulaType.DYNAMIC:
        record.fixed_amount = rules.base_amount
        record.percent_1 = rules.increment_percent
        record.threshold_1 = rules.increment_threshold

    else:
        record.fixed_amount = rules.fixed_amount
        record.percent_1 = rules.percent_rate

    if formula_type == FormulaType.SPECIAL_FORMULA:
        record.dynamic_increment = rules.maximum_share
        record.minimum_profit = rules.minimum_profit

    if formula_type == FormulaType.GROUPED:
        record.groups = [
            {"group_name": g.group_name, "percent_rate": str(g.percent_rate), "members": list(g.members)}
            for g in rules.groups
        ]

    return record
