"""
Rule Validation for the Profit Sharing Engine

Validates rules when an administrator saves them. The engine itself never
calls this: calculate() evaluates whatever rules it is handed, treating
absent parameters as zero.
Raises ConfigurationError with clear messages for any constraint violations.
"""

from decimal import Decimal

from .exceptions import ConfigurationError
from .models import HUNDRED, ZERO, FormulaType, ProfitSharingRules


class RulesValidator:
    """Validates profit sharing rules according to business rules."""

    def validate(self, rules: ProfitSharingRules) -> None:
        """
        Run all validations. Raises ConfigurationError if any check fails.

        Not checked on purpose: the total of group percentages (groups are
        independent and may exceed 100%).
        """
        FormulaType.parse(rules.formula_type)
        self._validate_amounts(rules)
        self._validate_percentages(rules)
        self._validate_tiers(rules)
        self._validate_groups(rules)

    def _validate_amounts(self, rules: ProfitSharingRules) -> None:
        """Monetary parameters cannot be negative."""
        amounts = {
            "fixed_amount": rules.fixed_amount,
            "minimum_profit": rules.minimum_profit,
            "maximum_share": rules.maximum_share,
            "base_amount": rules.base_amount,
            "increment_threshold": rules.increment_threshold,
        }
        for name, value in amounts.items():
            if value is not None and value < 0:
                raise ConfigurationError(f"{name} cannot be negative, got: {value}")

    def _validate_percentages(self, rules: ProfitSharingRules) -> None:
        """Percentages are expressed in [0, 100]."""
        self._check_percent("percent_rate", rules.percent_rate)
        self._check_percent("percent2", rules.percent2)
        self._check_percent("increment_percent", rules.increment_percent)

    def _validate_tiers(self, rules: ProfitSharingRules) -> None:
        """Tiers must form non-overlapping ascending brackets; only the last may be open-ended."""
        tiers = sorted(rules.tiers, key=lambda t: t.min_profit)

        for i, tier in enumerate(tiers):
            self._check_percent(f"Tier {i} percent_rate", tier.percent_rate)

            if tier.min_profit < 0:
                raise ConfigurationError(f"Tier {i} min_profit cannot be negative, got: {tier.min_profit}")

            if tier.max_profit is not None and tier.max_profit <= tier.min_profit:
                raise ConfigurationError(
                    f"Tier {i} max_profit must be greater than min_profit, "
                    f"got: {tier.min_profit} - {tier.max_profit}"
                )

            if i == 0:
                continue

            previous = tiers[i - 1]
            if previous.max_profit is None:
                raise ConfigurationError(f"Only the last tier can be open-ended (tier {i - 1} has no max_profit)")
            if tier.min_profit < previous.max_profit:
                raise ConfigurationError(
                    f"Tier {i} overlaps tier {i - 1}: starts at {tier.min_profit}, "
                    f"previous ends at {previous.max_profit}"
                )

    def _validate_groups(self, rules: ProfitSharingRules) -> None:
        for i, group in enumerate(rules.groups):
            if not group.group_name.strip():
                raise ConfigurationError(f"Group {i} must have a name")
            self._check_percent(f"Group '{group.group_name}' percent_rate", group.percent_rate)

    @staticmethod
    def _check_percent(name: str, value: Decimal | None) -> None:
        if value is None:
            return
        if not (ZERO <= value <= HUNDRED):
            raise ConfigurationError(f"{name} must be between 0 and 100, got: {value}")
