"""
Immutable snapshots — полностью материализованные FX-матрицы только для чтения

Построение (O(n²)):
    для каждой пары (a, b) с index(a) < index(b) в порядке валют источника:
        r = source.get_fx_rate(b, a)
        private.add_currency(b, a, r)

После построения каждая пара — прямой курс в приватной UncheckedFxMatrix,
поэтому чтение никогда не требует вывода и всегда успешно для любых двух
валют источника. Если источник не может разрешить какую-либо пару
(например, Checked-матрица с несвязным графом), построение падает с той же
ошибкой: частично разрешённый снапшот невозможен.

Снапшот владеет собственной копией данных. Последующие изменения источника
на снапшот не влияют. Мутаций и внутреннего состояния после построения нет,
поэтому снапшот можно читать из нескольких потоков без блокировок.

Два варианта:
- ImmutableFxMatrix: из UncheckedFxMatrix
- ImmutableCheckedFxMatrix: из CheckedFxMatrix
Оба принимают и "внешнее" представление: список валют + функция курса.
"""

import logging
from collections.abc import Callable, Hashable, Iterable, Sequence
from typing import Union

from fxmatrix.core.domain.amounts import CurrencyAmount, MultipleCurrencyAmount
from fxmatrix.core.domain.currency import Currency
from fxmatrix.core.errors import ImmutableViolation, InvalidArgument
from fxmatrix.matrix.checked import CheckedFxMatrix
from fxmatrix.matrix.conversion import convert
from fxmatrix.matrix.protocols import FxRateLookup
from fxmatrix.matrix.unchecked import UncheckedFxMatrix

logger = logging.getLogger(__name__)

RateFunction = Callable[[Hashable, Hashable], float]


class FxMatrixSnapshot:
    """Общая реализация чтения для обоих вариантов снапшота."""

    __slots__ = ("_matrix", "_hash")

    def __init__(self, currencies: Sequence[Hashable], rate: RateFunction) -> None:
        currencies = list(currencies)
        if len(currencies) == 1:
            raise InvalidArgument(
                f"Cannot build a snapshot from a single currency {currencies[0]}: rates need pairs"
            )
        matrix = UncheckedFxMatrix()
        for i, lower in enumerate(currencies):
            for higher in currencies[i + 1:]:
                matrix.add_currency(higher, lower, rate(higher, lower))
        object.__setattr__(self, "_matrix", matrix)
        object.__setattr__(
            self, "_hash", hash((type(self).__name__, matrix.currencies, _freeze(matrix.fx_rates)))
        )
        logger.debug(
            "materialized %s with %d currencies", type(self).__name__, len(currencies)
        )

    @classmethod
    def from_rates(
        cls,
        currencies: Iterable[Hashable],
        rate: RateFunction,
    ) -> "FxMatrixSnapshot":
        """
        Построение из внешнего представления.

        Args:
            currencies: Валюты в желаемом порядке индексов
            rate: rate(numerator, denominator) -> курс
        """
        if currencies is None or rate is None:
            raise InvalidArgument("currencies and rate must not be None")
        return cls(list(currencies), rate)

    # -------------------------------------------------------------------------
    # Мутации запрещены
    # -------------------------------------------------------------------------

    def add_currency(self, numerator: Hashable, denominator: Hashable, fx_rate: float) -> None:
        raise ImmutableViolation(f"{type(self).__name__} cannot be modified: add_currency")

    def update_rates(self, numerator: Hashable, denominator: Hashable, fx_rate: float) -> None:
        raise ImmutableViolation(f"{type(self).__name__} cannot be modified: update_rates")

    def __setattr__(self, name: str, value: object) -> None:
        raise ImmutableViolation(f"{type(self).__name__} cannot be modified: {name}")

    def __delattr__(self, name: str) -> None:
        raise ImmutableViolation(f"{type(self).__name__} cannot be modified: {name}")

    # -------------------------------------------------------------------------
    # Чтение (делегирование приватной матрице)
    # -------------------------------------------------------------------------

    def get_fx_rate(self, numerator: Hashable, denominator: Hashable) -> float:
        return self._matrix.get_fx_rate(numerator, denominator)

    def contains_pair(self, ccy1: Hashable, ccy2: Hashable) -> bool:
        return self._matrix.contains_pair(ccy1, ccy2)

    def convert(
        self,
        amount: Union[MultipleCurrencyAmount, Iterable[CurrencyAmount]],
        currency: Currency,
    ) -> CurrencyAmount:
        return convert(self, amount, currency)

    @property
    def currencies(self) -> tuple:
        return self._matrix.currencies

    @property
    def number_of_currencies(self) -> int:
        return self._matrix.number_of_currencies

    @property
    def fx_rates(self) -> list[list[float]]:
        return self._matrix.fx_rates

    # -------------------------------------------------------------------------
    # Object protocol
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self._matrix == other._matrix

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        codes = ", ".join(str(ccy) for ccy in self.currencies)
        return f"{type(self).__name__}([{codes}])"

    def __copy__(self) -> "FxMatrixSnapshot":
        return self

    def __deepcopy__(self, memo: dict) -> "FxMatrixSnapshot":
        return self

    def __reduce__(self) -> tuple:
        return _restore, (type(self), self.currencies, self.fx_rates)


class ImmutableFxMatrix(FxMatrixSnapshot):
    """Снапшот UncheckedFxMatrix (источник обязан иметь все попарные курсы)."""

    __slots__ = ()

    @classmethod
    def of(cls, source: Union[UncheckedFxMatrix, FxRateLookup]) -> "ImmutableFxMatrix":
        """
        Raises:
            InvalidArgument: source is None
            NoRateAvailable: У источника нет курса для какой-либо пары
        """
        if source is None:
            raise InvalidArgument("source must not be None")
        return cls(source.currencies, source.get_fx_rate)


class ImmutableCheckedFxMatrix(FxMatrixSnapshot):
    """Снапшот CheckedFxMatrix: выведенные кросс-курсы фиксируются при построении."""

    __slots__ = ()

    @classmethod
    def of(cls, source: Union[CheckedFxMatrix, FxRateLookup]) -> "ImmutableCheckedFxMatrix":
        """
        Raises:
            InvalidArgument: source is None
            NoRateAvailable: Граф заданных курсов источника несвязен
        """
        if source is None:
            raise InvalidArgument("source must not be None")
        return cls(source.currencies, source.get_fx_rate)


def _restore(cls: type, currencies: tuple, rows: list[list[float]]) -> FxMatrixSnapshot:
    store = UncheckedFxMatrix.from_table(currencies, rows)
    return cls(store.currencies, store.get_fx_rate)


def _freeze(rows: list[list[float]]) -> tuple:
    return tuple(tuple(row) for row in rows)
