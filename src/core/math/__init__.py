"""
Core math modules

Decimal-примитивы с гарантией точности: безопасное деление и квантование по lot size.
"""

from src.core.math.numerical_safeguards import (
    BPS_PER_UNIT,
    ONE,
    ZERO,
    bps_to_fraction,
    is_valid_decimal,
    lot_step,
    round_down_to_lot,
    safe_divide,
    sanitize_decimal,
    to_decimal,
    validate_positive,
)

__all__ = [
    # Constants
    "ZERO",
    "ONE",
    "BPS_PER_UNIT",
    # Conversion
    "to_decimal",
    "is_valid_decimal",
    "sanitize_decimal",
    # Safe division
    "safe_divide",
    "bps_to_fraction",
    # Lot size
    "round_down_to_lot",
    "lot_step",
    # Validation
    "validate_positive",
]
