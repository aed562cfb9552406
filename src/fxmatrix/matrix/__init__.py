"""
FX matrix implementations

- UncheckedFxMatrix: хранит только заданные курсы
- CheckedFxMatrix: выводит кросс-курсы и проверяет согласованность
- ImmutableFxMatrix / ImmutableCheckedFxMatrix: материализованные снапшоты
"""

from fxmatrix.matrix.checked import CheckedFxMatrix
from fxmatrix.matrix.config import ConsistencyConfig
from fxmatrix.matrix.consistency import check_rates_are_consistent, rates_are_consistent
from fxmatrix.matrix.conversion import convert
from fxmatrix.matrix.immutable import (
    FxMatrixSnapshot,
    ImmutableCheckedFxMatrix,
    ImmutableFxMatrix,
)
from fxmatrix.matrix.protocols import FxMatrixGrowth, FxMatrixUpdate, FxRateLookup
from fxmatrix.matrix.serialization import from_payload, to_payload
from fxmatrix.matrix.storage import UNSET_RATE
from fxmatrix.matrix.unchecked import UncheckedFxMatrix

__all__ = [
    # Matrices
    "UncheckedFxMatrix",
    "CheckedFxMatrix",
    "FxMatrixSnapshot",
    "ImmutableFxMatrix",
    "ImmutableCheckedFxMatrix",
    # Capabilities
    "FxRateLookup",
    "FxMatrixGrowth",
    "FxMatrixUpdate",
    # Consistency
    "ConsistencyConfig",
    "rates_are_consistent",
    "check_rates_are_consistent",
    # Conversion
    "convert",
    # Serialization
    "to_payload",
    "from_payload",
    # Storage
    "UNSET_RATE",
]
