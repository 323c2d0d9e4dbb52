"""
Formulas Package

Provides one strategy per profit sharing formula type.
"""

from .dynamic import DynamicFormula
from .fixed import FixedOnlyFormula, FixedPlusPercentFormula
from .grouped import GroupedFormula
from .percent import PercentSimpleFormula
from .special import SpecialFormula
from .tiered import TieredFormula

__all__ = [
    "FixedOnlyFormula",
    "PercentSimpleFormula",
    "FixedPlusPercentFormula",
    "TieredFormula",
    "SpecialFormula",
    "GroupedFormula",
    "DynamicFormula",
]
