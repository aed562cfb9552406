"""
Core math modules для fxmatrix

Математические примитивы с гарантией численной стабильности.
"""

# Numerical Safeguards
from fxmatrix.core.math.numerical_safeguards import (
    # Epsilon constants
    EPS_FLOAT_COMPARE_REL,
    # NaN/Inf checks
    is_positive_rate,
    is_valid_float,
    # Truncation
    truncate_to_decimals,
)

__all__ = [
    # Numerical Safeguards: Epsilon constants
    "EPS_FLOAT_COMPARE_REL",
    # Numerical Safeguards: NaN/Inf checks
    "is_positive_rate",
    "is_valid_float",
    # Numerical Safeguards: Truncation
    "truncate_to_decimals",
]
