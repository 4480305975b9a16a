"""
Core math modules

Толерантные сравнения и валидация значений полунорм.
"""

from src.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_SEMINORM_ABS,
    EPS_SEMINORM_REL,
    # NaN/Inf
    is_valid_float,
    # Epsilon comparisons
    is_close,
    is_zero,
    le_with_tolerance,
    tolerance_for,
    # Validation
    validate_non_negative,
    validate_positive,
)

__all__ = [
    # Epsilon constants
    "EPS_SEMINORM_ABS",
    "EPS_SEMINORM_REL",
    # NaN/Inf
    "is_valid_float",
    # Epsilon comparisons
    "is_close",
    "is_zero",
    "le_with_tolerance",
    "tolerance_for",
    # Validation
    "validate_non_negative",
    "validate_positive",
]
