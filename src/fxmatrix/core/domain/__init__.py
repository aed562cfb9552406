"""
Domain models and value objects.

Contains fundamental value types: Currency, CurrencyAmount, MultipleCurrencyAmount.
"""

from fxmatrix.core.domain.amounts import CurrencyAmount, MultipleCurrencyAmount
from fxmatrix.core.domain.currency import (
    AUD,
    BRL,
    CAD,
    CHF,
    DEM,
    EUR,
    GBP,
    JPY,
    NOK,
    NZD,
    SEK,
    USD,
    Currency,
)

__all__ = [
    # Currency model
    "Currency",
    # Predefined currencies
    "AUD",
    "BRL",
    "CAD",
    "CHF",
    "DEM",
    "EUR",
    "GBP",
    "JPY",
    "NOK",
    "NZD",
    "SEK",
    "USD",
    # Amounts
    "CurrencyAmount",
    "MultipleCurrencyAmount",
]
