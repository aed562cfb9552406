"""
fxmatrix — разреженные матрицы валютных курсов с выводом кросс-курсов
"""

from fxmatrix.core.domain import Currency, CurrencyAmount, MultipleCurrencyAmount
from fxmatrix.core.errors import (
    AlreadyPresent,
    FxMatrixError,
    ImmutableViolation,
    InconsistentRate,
    InvalidArgument,
    NoRateAvailable,
    UnknownCurrency,
)
from fxmatrix.matrix import (
    CheckedFxMatrix,
    ConsistencyConfig,
    ImmutableCheckedFxMatrix,
    ImmutableFxMatrix,
    UncheckedFxMatrix,
    from_payload,
    to_payload,
)

__version__ = "0.1.0"

__all__ = [
    # Value types
    "Currency",
    "CurrencyAmount",
    "MultipleCurrencyAmount",
    # Matrices
    "UncheckedFxMatrix",
    "CheckedFxMatrix",
    "ImmutableFxMatrix",
    "ImmutableCheckedFxMatrix",
    "ConsistencyConfig",
    # Serialization
    "to_payload",
    "from_payload",
    # Errors
    "FxMatrixError",
    "InvalidArgument",
    "UnknownCurrency",
    "AlreadyPresent",
    "NoRateAvailable",
    "InconsistentRate",
    "ImmutableViolation",
]
