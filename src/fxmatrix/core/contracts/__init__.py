"""
Contract Validation Module

Валидация JSON контрактов fxmatrix.
"""

from .validators import (
    ContractValidator,
    FxMatrixValidator,
    SchemaLoader,
    validate_fx_matrix,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "FxMatrixValidator",
    # Functions
    "validate_fx_matrix",
]
