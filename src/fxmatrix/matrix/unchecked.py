"""
UncheckedFxMatrix — мутабельная FX-матрица без вывода и проверок

Хранит ровно те курсы, которые были заданы. Кросс-курсы не выводятся,
согласованность не проверяется: можно задать GBP/USD, EUR/USD и GBP/EUR,
не согласованные между собой.

Рост таблицы (add_currency):
    - обе валюты новые: в индекс добавляются denominator, затем numerator
      (denominator получает меньший индекс), cell = rate
    - известен numerator: добавляется denominator (больший индекс),
      cell(numerator, denominator) = 1 / rate
    - известен denominator: добавляется numerator, cell = rate
    - обе известны: AlreadyPresent если ячейка задана, иначе запись по
      правилу ориентации
"""

import logging
from collections.abc import Hashable, Iterable
from typing import TYPE_CHECKING, Union

from fxmatrix.core.domain.amounts import CurrencyAmount, MultipleCurrencyAmount
from fxmatrix.core.domain.currency import Currency
from fxmatrix.core.errors import AlreadyPresent, InvalidArgument, NoRateAvailable, UnknownCurrency
from fxmatrix.matrix.arguments import check_currency, check_pair, check_rate
from fxmatrix.matrix.conversion import convert
from fxmatrix.matrix.protocols import FxMatrixGrowth, FxMatrixUpdate
from fxmatrix.matrix.storage import UNSET_RATE, CurrencyIndex, RateStore

if TYPE_CHECKING:
    from fxmatrix.matrix.immutable import ImmutableFxMatrix

logger = logging.getLogger(__name__)


class UncheckedFxMatrix(FxMatrixGrowth, FxMatrixUpdate):
    """
    Разреженная FX-матрица, отвечающая только тем, что ей сообщили.

    Не потокобезопасна: add_currency/update_rates выполняют многошаговый
    рост таблицы. Для разделения между потоками используйте as_immutable().
    """

    def __init__(self) -> None:
        self._index = CurrencyIndex()
        self._rates = RateStore()

    @classmethod
    def of(cls) -> "UncheckedFxMatrix":
        return cls()

    @classmethod
    def from_table(
        cls,
        currencies: Iterable[Hashable],
        rows: list[list[float]],
    ) -> "UncheckedFxMatrix":
        """
        Восстановление матрицы из списка валют и рваных строк курсов.

        Формат строк совпадает с fx_rates: строка p содержит cell(p, q)
        для q > p, UNSET_RATE (-1) для незаданных пар.

        Raises:
            InvalidArgument: Если форма строк не соответствует числу валют
                             или ячейка не является курсом/sentinel
        """
        matrix = cls()
        load_rate_table(matrix._index, matrix._rates, currencies, rows)
        return matrix

    # -------------------------------------------------------------------------
    # Мутации
    # -------------------------------------------------------------------------

    def add_currency(self, numerator: Hashable, denominator: Hashable, fx_rate: float) -> None:
        """
        Добавление курса numerator/denominator.

        Args:
            numerator: Валюта-числитель
            denominator: Валюта-знаменатель
            fx_rate: Количество numerator за одну единицу denominator (> 0)

        Raises:
            InvalidArgument: None-валюта, numerator == denominator, rate <= 0
            AlreadyPresent: Для пары уже задан курс
        """
        check_pair(numerator, denominator)
        check_rate(fx_rate)
        numerator_index = self._index.index_of(numerator)
        denominator_index = self._index.index_of(denominator)

        if numerator_index is not None and denominator_index is not None:
            if self._rates.is_set(numerator_index, denominator_index):
                raise AlreadyPresent(numerator, denominator)
            self._rates.put(numerator_index, denominator_index, fx_rate)
            return

        if numerator_index is None and denominator_index is None:
            denominator_index = self._index.append(denominator)
            numerator_index = self._index.append(numerator)
            self._rates.grow(2)
        elif numerator_index is None:
            numerator_index = self._index.append(numerator)
            self._rates.grow(1)
        else:
            denominator_index = self._index.append(denominator)
            self._rates.grow(1)
        self._rates.put(numerator_index, denominator_index, fx_rate)
        logger.debug(
            "added %s/%s=%s, matrix now has %d currencies",
            numerator, denominator, fx_rate, len(self._index),
        )

    def update_rates(self, numerator: Hashable, denominator: Hashable, fx_rate: float) -> None:
        """
        Безусловная перезапись курса существующей пары.

        Raises:
            InvalidArgument: None-валюта, numerator == denominator, rate <= 0
            UnknownCurrency: Валюта не добавлялась в матрицу
        """
        check_pair(numerator, denominator)
        check_rate(fx_rate)
        numerator_index, denominator_index = self._indices(numerator, denominator)
        self._rates.put(numerator_index, denominator_index, fx_rate)

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def get_fx_rate(self, numerator: Hashable, denominator: Hashable) -> float:
        """
        Курс numerator/denominator, только из заданных ячеек.

        Returns:
            1.0 для numerator == denominator (даже для валют вне матрицы)

        Raises:
            InvalidArgument: None-валюта
            UnknownCurrency: Валюта не добавлялась в матрицу
            NoRateAvailable: Курс для пары не задан
        """
        check_currency(numerator, "numerator")
        check_currency(denominator, "denominator")
        if numerator == denominator:
            return 1.0
        numerator_index, denominator_index = self._indices(numerator, denominator)
        rate = self._rates.rate(numerator_index, denominator_index)
        if rate is None:
            raise NoRateAvailable(numerator, denominator, "rate was not supplied")
        return rate

    def contains_pair(self, ccy1: Hashable, ccy2: Hashable) -> bool:
        check_currency(ccy1, "ccy1")
        check_currency(ccy2, "ccy2")
        if ccy1 == ccy2:
            return True
        index1 = self._index.index_of(ccy1)
        index2 = self._index.index_of(ccy2)
        if index1 is None or index2 is None:
            return False
        return self._rates.is_set(index1, index2)

    def convert(
        self,
        amount: Union[MultipleCurrencyAmount, Iterable[CurrencyAmount]],
        currency: Currency,
    ) -> CurrencyAmount:
        return convert(self, amount, currency)

    @property
    def currencies(self) -> tuple:
        """Валюты в порядке индексов."""
        return self._index.currencies

    @property
    def number_of_currencies(self) -> int:
        return len(self._index)

    @property
    def fx_rates(self) -> list[list[float]]:
        """Копия треугольной таблицы в виде рваных строк."""
        return self._rates.rows()

    def as_immutable(self) -> "ImmutableFxMatrix":
        from fxmatrix.matrix.immutable import ImmutableFxMatrix

        return ImmutableFxMatrix.of(self)

    def _indices(self, numerator: Hashable, denominator: Hashable) -> tuple[int, int]:
        numerator_index = self._index.index_of(numerator)
        if numerator_index is None:
            raise UnknownCurrency(numerator)
        denominator_index = self._index.index_of(denominator)
        if denominator_index is None:
            raise UnknownCurrency(denominator)
        return numerator_index, denominator_index

    # -------------------------------------------------------------------------
    # Object protocol
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        return self.currencies == other.currencies and self._rates == other._rates

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        codes = ", ".join(str(ccy) for ccy in self.currencies)
        return f"{type(self).__name__}([{codes}])"


def load_rate_table(
    index: CurrencyIndex,
    table: RateStore,
    currencies: Iterable[Hashable],
    rows: list[list[float]],
) -> None:
    """Заполнение пустых index/table из списка валют и рваных строк."""
    currencies = list(currencies)
    if len(rows) != len(currencies):
        raise InvalidArgument(
            f"Expected {len(currencies)} rows for {len(currencies)} currencies, got {len(rows)}"
        )
    for currency in currencies:
        check_currency(currency, "currency")
        if currency in index:
            raise InvalidArgument(f"Duplicate currency {currency}")
        index.append(currency)
    table.grow(len(currencies))
    for p, row in enumerate(rows):
        expected = len(currencies) - p - 1
        if len(row) != expected:
            raise InvalidArgument(f"Row {p} must have {expected} cells, got {len(row)}")
        for offset, cell in enumerate(row):
            if cell != UNSET_RATE:
                check_rate(cell)
            table.set(p, p + offset + 1, float(cell))
