"""
Domain Models for the Profit Sharing Engine

These dataclasses provide type-safe representations of the rules, inputs and
results of a profit sharing calculation.
All monetary values and percentages use Decimal for precision.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum

from .exceptions import ConfigurationError

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value, name: str) -> Decimal:
    """Convert a raw payload value to Decimal, going through str for exactness."""
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be numeric, got: {value!r}")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ConfigurationError(f"{name} must be numeric, got: {value!r}") from e
    # NaN and Infinity parse but cannot be compared or rounded
    if not result.is_finite():
        raise ConfigurationError(f"{name} must be a finite number, got: {value!r}")
    return result


def optional_decimal(value, name: str) -> Decimal | None:
    """Like to_decimal, but None and empty strings stay None."""
    if value is None or value == "":
        return None
    return to_decimal(value, name)


def _pick(data: dict, *keys, default=None):
    """Return the first key present in data (snake_case first, then aliases)."""
    for key in keys:
        if key in data:
            return data[key]
    return default


# =============================================================================
# FORMULA TYPES
# =============================================================================


class FormulaType(str, Enum):
    """The seven profit sharing strategies a project can be configured with."""

    FIXED_ONLY = "FIXED_ONLY"
    PERCENT_SIMPLE = "PERCENT_SIMPLE"
    FIXED_PLUS_PERCENT = "FIXED_PLUS_PERCENT"
    TIERED = "TIERED"
    SPECIAL_FORMULA = "SPECIAL_FORMULA"
    GROUPED = "GROUPED"
    DYNAMIC = "DYNAMIC"

    @classmethod
    def parse(cls, value) -> "FormulaType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ConfigurationError(
                f"Unknown formula type: {value!r}. Must be one of: {valid}"
            ) from None


@dataclass(frozen=True)
class FormulaTypeInfo:
    """Catalog entry shown to administrators when choosing a formula."""

    type: FormulaType
    label: str
    description: str


FORMULA_CATALOG = (
    FormulaTypeInfo(FormulaType.FIXED_ONLY, "Monto Fijo", "Monto fijo independiente de la utilidad"),
    FormulaTypeInfo(FormulaType.PERCENT_SIMPLE, "Porcentaje Simple", "Porcentaje simple de la utilidad neta"),
    FormulaTypeInfo(FormulaType.FIXED_PLUS_PERCENT, "Fijo + Porcentaje", "Monto fijo más porcentaje de utilidad"),
    FormulaTypeInfo(FormulaType.TIERED, "Escalonado", "Porcentajes escalonados según rangos de utilidad"),
    FormulaTypeInfo(FormulaType.SPECIAL_FORMULA, "Fórmula Especial", "Con mínimo de utilidad y tope máximo"),
    FormulaTypeInfo(FormulaType.GROUPED, "Por Grupos", "Distribución por grupos o categorías"),
    FormulaTypeInfo(FormulaType.DYNAMIC, "Dinámico", "Monto base más incremento sobre el umbral"),
)


# =============================================================================
# RULE MODELS
# =============================================================================


@dataclass
class TierConfig:
    """A profit bracket with its own rate."""

    min_profit: Decimal
    max_profit: Decimal | None  # None = infinite
    percent_rate: Decimal

    @classmethod
    def from_dict(cls, data: dict) -> "TierConfig":
        if not isinstance(data, dict):
            raise ConfigurationError(f"Each tier must be an object, got: {data!r}")
        return cls(
            min_profit=optional_decimal(_pick(data, "min_profit", "minProfit"), "tier.min_profit") or ZERO,
            max_profit=optional_decimal(_pick(data, "max_profit", "maxProfit"), "tier.max_profit"),
            percent_rate=optional_decimal(_pick(data, "percent_rate", "percentRate"), "tier.percent_rate") or ZERO,
        )


@dataclass
class GroupConfig:
    """A named group receiving its own percentage of net profit."""

    group_name: str
    percent_rate: Decimal
    members: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "GroupConfig":
        if not isinstance(data, dict):
            raise ConfigurationError(f"Each group must be an object, got: {data!r}")
        return cls(
            group_name=str(_pick(data, "group_name", "groupName", default="")),
            percent_rate=optional_decimal(_pick(data, "percent_rate", "percentRate"), "group.percent_rate") or ZERO,
            members=[str(m) for m in data.get("members") or []],
        )


@dataclass
class ProfitSharingRules:
    """
    Profit sharing configuration for a single project.

    Only the parameters relevant to formula_type are read; the rest are
    ignored. Absent numeric parameters are None here and read as zero through
    the accessor properties below, except maximum_share where absent (or zero)
    means there is no cap.
    """

    formula_type: FormulaType
    fixed_amount: Decimal | None = None
    percent_rate: Decimal | None = None
    percent2: Decimal | None = None
    tiers: list[TierConfig] = field(default_factory=list)
    minimum_profit: Decimal | None = None
    maximum_share: Decimal | None = None
    groups: list[GroupConfig] = field(default_factory=list)
    base_amount: Decimal | None = None
    increment_percent: Decimal | None = None
    increment_threshold: Decimal | None = None

    @property
    def fixed(self) -> Decimal:
        return self.fixed_amount if self.fixed_amount is not None else ZERO

    @property
    def rate(self) -> Decimal:
        return self.percent_rate if self.percent_rate is not None else ZERO

    @property
    def minimum(self) -> Decimal:
        return self.minimum_profit if self.minimum_profit is not None else ZERO

    @property
    def cap(self) -> Decimal | None:
        """Ceiling on the share, or None when uncapped."""
        if self.maximum_share is None or self.maximum_share == ZERO:
            return None
        return self.maximum_share

    @property
    def base(self) -> Decimal:
        return self.base_amount if self.base_amount is not None else ZERO

    @property
    def increment_rate(self) -> Decimal:
        return self.increment_percent if self.increment_percent is not None else ZERO

    @property
    def threshold(self) -> Decimal:
        return self.increment_threshold if self.increment_threshold is not None else ZERO

    @classmethod
    def from_dict(cls, data: dict) -> "ProfitSharingRules":
        if not isinstance(data, dict):
            raise ConfigurationError(f"rules must be an object, got: {data!r}")
        tiers = _pick(data, "tiers") or []
        groups = _pick(data, "groups") or []
        if not isinstance(tiers, list) or not isinstance(groups, list):
            raise ConfigurationError("tiers and groups must be lists")
        return cls(
            formula_type=FormulaType.parse(_pick(data, "formula_type", "formulaType")),
            fixed_amount=optional_decimal(_pick(data, "fixed_amount", "fixedAmount"), "fixed_amount"),
            # Support both 'percent_rate' and the stored column name 'percent1'
            percent_rate=optional_decimal(
                _pick(data, "percent_rate", "percentRate", "percent1"), "percent_rate"
            ),
            percent2=optional_decimal(_pick(data, "percent2"), "percent2"),
            tiers=[TierConfig.from_dict(t) for t in tiers],
            minimum_profit=optional_decimal(_pick(data, "minimum_profit", "minimumProfit"), "minimum_profit"),
            maximum_share=optional_decimal(_pick(data, "maximum_share", "maximumShare"), "maximum_share"),
            groups=[GroupConfig.from_dict(g) for g in groups],
            base_amount=optional_decimal(_pick(data, "base_amount", "baseAmount"), "base_amount"),
            increment_percent=optional_decimal(
                _pick(data, "increment_percent", "incrementPercent"), "increment_percent"
            ),
            increment_threshold=optional_decimal(
                _pick(data, "increment_threshold", "incrementThreshold"), "increment_threshold"
            ),
        )


# =============================================================================
# INPUT / RESULT MODELS
# =============================================================================


@dataclass
class ProfitSharingInput:
    """
    Everything needed to evaluate one project for one period.

    net_profit is expected to equal total_income - total_cost; the engine
    trusts it as given and never recomputes it.
    """

    project_id: str
    project_name: str
    total_income: Decimal
    total_cost: Decimal
    net_profit: Decimal
    rules: ProfitSharingRules

    @property
    def positive_profit(self) -> Decimal:
        """Net profit clamped at zero."""
        return max(self.net_profit, ZERO)

    @classmethod
    def from_dict(cls, data: dict) -> "ProfitSharingInput":
        income = to_decimal(_pick(data, "total_income", "totalIncome", default=0), "total_income")
        cost = to_decimal(_pick(data, "total_cost", "totalCost", default=0), "total_cost")
        net = _pick(data, "net_profit", "netProfit")
        return cls(
            project_id=str(_pick(data, "project_id", "projectId", default="")),
            project_name=str(_pick(data, "project_name", "projectName", default="")),
            total_income=income,
            total_cost=cost,
            net_profit=to_decimal(net, "net_profit") if net is not None else income - cost,
            rules=ProfitSharingRules.from_dict(data["rules"]),
        )


@dataclass
class BreakdownLine:
    """One itemized component of a computed share."""

    description: str
    amount: Decimal
    percent_of_profit: Decimal | None = None


@dataclass
class FormulaOutcome:
    """What a formula strategy produces before the engine stamps identity on it."""

    total_share: Decimal
    breakdown: list[BreakdownLine]
    calculation_details: str


@dataclass
class ProfitSharingResult:
    """Final output of a profit sharing calculation."""

    project_id: str
    project_name: str
    formula_type: FormulaType
    net_profit: Decimal
    total_share: Decimal
    breakdown: list[BreakdownLine] = field(default_factory=list)
    calculation_details: str = ""

    @property
    def breakdown_total(self) -> Decimal:
        return sum((line.amount for line in self.breakdown), ZERO)
