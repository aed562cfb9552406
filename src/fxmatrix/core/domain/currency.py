"""
Currency — идентификатор валюты

Immutable Pydantic модель: непрозрачный, сравнимый, хешируемый идентификатор
денежной единицы (ISO 4217 код). Поведения нет, для матрицы курсов равенство
валют означает равенство кодов.
"""

from functools import lru_cache
from typing import Final

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# CURRENCY MODEL
# =============================================================================


class Currency(BaseModel):
    """
    Валюта, идентифицируемая трёхбуквенным ISO-кодом.

    Immutable модель (frozen=True), поэтому хешируема и пригодна как ключ
    индекса валют. Упорядочена по коду.
    """

    code: str = Field(..., pattern=r"^[A-Z]{3}$", description="ISO 4217 код (например, 'USD')")

    model_config = {"frozen": True}

    @field_validator("code", mode="before")
    @classmethod
    def normalize_code(cls, v: object) -> object:
        """Приведение кода к верхнему регистру до проверки pattern."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @classmethod
    def of(cls, code: str) -> "Currency":
        """
        Получение валюты по коду (кэшируется).

        Args:
            code: ISO-код в любом регистре

        Returns:
            Currency с нормализованным кодом

        Raises:
            pydantic.ValidationError: Если код не является трёхбуквенным
        """
        return _currency_of(code.strip().upper())

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"Currency({self.code!r})"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Currency):
            return NotImplemented
        return self.code < other.code

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Currency):
            return NotImplemented
        return self.code <= other.code

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Currency):
            return NotImplemented
        return self.code > other.code

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Currency):
            return NotImplemented
        return self.code >= other.code


@lru_cache(maxsize=None)
def _currency_of(code: str) -> Currency:
    return Currency(code=code)


# =============================================================================
# ПРЕДОПРЕДЕЛЁННЫЕ ВАЛЮТЫ
# =============================================================================

USD: Final[Currency] = Currency.of("USD")
EUR: Final[Currency] = Currency.of("EUR")
GBP: Final[Currency] = Currency.of("GBP")
JPY: Final[Currency] = Currency.of("JPY")
CHF: Final[Currency] = Currency.of("CHF")
AUD: Final[Currency] = Currency.of("AUD")
NZD: Final[Currency] = Currency.of("NZD")
CAD: Final[Currency] = Currency.of("CAD")
BRL: Final[Currency] = Currency.of("BRL")
SEK: Final[Currency] = Currency.of("SEK")
NOK: Final[Currency] = Currency.of("NOK")
DEM: Final[Currency] = Currency.of("DEM")
