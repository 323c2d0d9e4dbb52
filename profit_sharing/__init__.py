"""
PROFIT SHARING CALCULATION ENGINE
Version 1.0
"""

from .batch import BatchCalculator, BatchReport
from .engine import ProfitSharingEngine, calculate, get_formula_types
from .exceptions import ConfigurationError
from .models import FormulaType, ProfitSharingInput, ProfitSharingResult, ProfitSharingRules

__all__ = [
    "ProfitSharingEngine",
    "BatchCalculator",
    "BatchReport",
    "ConfigurationError",
    "FormulaType",
    "ProfitSharingInput",
    "ProfitSharingResult",
    "ProfitSharingRules",
    "calculate",
    "get_formula_types",
]
