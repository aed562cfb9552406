"""
CurrencyAmount / MultipleCurrencyAmount — денежные суммы

Immutable Pydantic модели:
- CurrencyAmount: сумма в одной валюте
- MultipleCurrencyAmount: "мешок" сумм в разных валютах (не более одной
  суммы на валюту, повторы суммируются при создании)

MultipleCurrencyAmount — входное значение для конвертации через FX-матрицу.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Union

from pydantic import BaseModel, Field, field_validator, model_validator

from fxmatrix.core.domain.currency import Currency
from fxmatrix.core.errors import InvalidArgument, UnknownCurrency
from fxmatrix.core.math.numerical_safeguards import is_valid_float


# =============================================================================
# CURRENCY AMOUNT
# =============================================================================


class CurrencyAmount(BaseModel):
    """Сумма в одной валюте."""

    currency: Currency = Field(..., description="Валюта суммы")
    amount: float = Field(..., description="Сумма (может быть отрицательной)")

    model_config = {"frozen": True}

    @field_validator("amount")
    @classmethod
    def validate_amount_finite(cls, v: float) -> float:
        """NaN/Inf суммы запрещены."""
        if not is_valid_float(v):
            raise ValueError(f"amount must be a valid float (not NaN/Inf), got {v}")
        return v

    @classmethod
    def of(cls, currency: Currency, amount: float) -> "CurrencyAmount":
        if currency is None:
            raise InvalidArgument("currency must not be None")
        return cls(currency=currency, amount=amount)

    def plus(self, other: "CurrencyAmount") -> "CurrencyAmount":
        """
        Сложение сумм в одной валюте.

        Raises:
            InvalidArgument: Если other is None или валюты различаются
        """
        if other is None:
            raise InvalidArgument("other must not be None")
        if other.currency != self.currency:
            raise InvalidArgument(
                f"Cannot add {other.currency} amount to {self.currency} amount"
            )
        return CurrencyAmount(currency=self.currency, amount=self.amount + other.amount)

    def multiplied_by(self, factor: float) -> "CurrencyAmount":
        return CurrencyAmount(currency=self.currency, amount=self.amount * factor)

    def __str__(self) -> str:
        return f"{self.currency} {self.amount}"


# =============================================================================
# MULTIPLE CURRENCY AMOUNT
# =============================================================================


AmountsSource = Union[
    Mapping[Currency, float],
    Iterable[CurrencyAmount],
]


class MultipleCurrencyAmount(BaseModel):
    """
    Набор сумм в разных валютах.

    Инвариант: каждая валюта встречается не более одного раза, суммы
    хранятся упорядоченными по валюте. Повторы во входных данных
    суммируются (model_validator).
    """

    currency_amounts: tuple[CurrencyAmount, ...] = Field(
        default=(), description="Суммы, по одной на валюту"
    )

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def merge_repeated_currencies(cls, data: object) -> object:
        """Суммирование повторяющихся валют и сортировка по валюте."""
        if not isinstance(data, dict) or "currency_amounts" not in data:
            return data
        raw = data["currency_amounts"]
        if raw is None:
            raise ValueError("currency_amounts must not be None")
        merged: dict[Currency, float] = {}
        for item in raw:
            if item is None:
                raise ValueError("currency_amounts must not contain None")
            if not isinstance(item, CurrencyAmount):
                item = CurrencyAmount.model_validate(item)
            merged[item.currency] = merged.get(item.currency, 0.0) + item.amount
        return {
            **data,
            "currency_amounts": tuple(
                CurrencyAmount(currency=ccy, amount=merged[ccy]) for ccy in sorted(merged)
            ),
        }

    # -------------------------------------------------------------------------
    # Фабрики
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, source: AmountsSource) -> "MultipleCurrencyAmount":
        """
        Создание из mapping {Currency: amount} или iterable CurrencyAmount.

        Raises:
            InvalidArgument: Если source is None или содержит None
        """
        if source is None:
            raise InvalidArgument("source must not be None")
        if isinstance(source, CurrencyAmount):
            return cls(currency_amounts=(source,))
        if isinstance(source, Mapping):
            items = []
            for ccy, amount in source.items():
                if ccy is None or amount is None:
                    raise InvalidArgument("currency and amount must not be None")
                items.append(CurrencyAmount(currency=ccy, amount=amount))
            return cls(currency_amounts=tuple(items))
        items = list(source)
        if any(item is None for item in items):
            raise InvalidArgument("currency amounts must not contain None")
        return cls(currency_amounts=tuple(items))

    @classmethod
    def of_amount(cls, currency: Currency, amount: float) -> "MultipleCurrencyAmount":
        return cls.of([CurrencyAmount.of(currency, amount)])

    @classmethod
    def of_sequences(
        cls, currencies: Sequence[Currency], amounts: Sequence[float]
    ) -> "MultipleCurrencyAmount":
        """
        Создание из параллельных последовательностей валют и сумм.

        Raises:
            InvalidArgument: Если последовательности None, разной длины
                             или содержат None
        """
        if currencies is None or amounts is None:
            raise InvalidArgument("currencies and amounts must not be None")
        if len(currencies) != len(amounts):
            raise InvalidArgument(
                f"currencies and amounts must have equal length: "
                f"{len(currencies)} != {len(amounts)}"
            )
        items = []
        for ccy, amount in zip(currencies, amounts):
            if ccy is None or amount is None:
                raise InvalidArgument("currencies and amounts must not contain None")
            items.append(CurrencyAmount(currency=ccy, amount=amount))
        return cls(currency_amounts=tuple(items))

    # -------------------------------------------------------------------------
    # Доступ
    # -------------------------------------------------------------------------

    @property
    def currencies(self) -> tuple[Currency, ...]:
        return tuple(ca.currency for ca in self.currency_amounts)

    @property
    def size(self) -> int:
        return len(self.currency_amounts)

    def get_currency_amount(self, currency: Currency) -> CurrencyAmount | None:
        """Сумма в валюте или None, если валюты нет в наборе."""
        if currency is None:
            raise InvalidArgument("currency must not be None")
        for ca in self.currency_amounts:
            if ca.currency == currency:
                return ca
        return None

    def get_amount(self, currency: Currency) -> float:
        """
        Сумма в валюте.

        Raises:
            InvalidArgument: Если currency is None
            UnknownCurrency: Если валюты нет в наборе
        """
        ca = self.get_currency_amount(currency)
        if ca is None:
            raise UnknownCurrency(currency)
        return ca.amount

    # -------------------------------------------------------------------------
    # Операции (возвращают новый экземпляр)
    # -------------------------------------------------------------------------

    def plus(
        self, other: Union[CurrencyAmount, "MultipleCurrencyAmount"]
    ) -> "MultipleCurrencyAmount":
        if other is None:
            raise InvalidArgument("other must not be None")
        if isinstance(other, CurrencyAmount):
            extra: tuple[CurrencyAmount, ...] = (other,)
        else:
            extra = other.currency_amounts
        return MultipleCurrencyAmount(currency_amounts=self.currency_amounts + extra)

    def without(self, currency: Currency) -> "MultipleCurrencyAmount":
        if currency is None:
            raise InvalidArgument("currency must not be None")
        return MultipleCurrencyAmount(
            currency_amounts=tuple(ca for ca in self.currency_amounts if ca.currency != currency)
        )

    def __str__(self) -> str:
        return "[" + ", ".join(str(ca) for ca in self.currency_amounts) + "]"
