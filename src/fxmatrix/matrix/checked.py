"""
CheckedFxMatrix — мутабельная FX-матрица с выводом кросс-курсов и проверкой

Отличия от UncheckedFxMatrix:
- Параллельная таблица SuppliedFlags: True только для ячеек, записанных
  напрямую (add_currency / update_rates); ячейки, появившиеся при росте
  таблицы, остаются False
- get_fx_rate выводит отсутствующие курсы через граф заданных пар
- add_currency / update_rates отвергают курсы, не согласованные с уже
  выводимыми (InconsistentRate)

ВЫВОД КУРСА (граф заданных пар):
    Узлы — индексы валют, рёбра — пары с supplied=True.
    Вес ребра u→v = rate(u, v); обратное ребро имеет вес 1 / rate.
    Поиск в ширину от numerator до denominator, курс = произведение весов
    вдоль найденного пути:

        rate(A, D) = rate(A, B) × rate(B, C) × rate(C, D)

    BFS находит путь с минимальным числом переходов, поэтому при
    согласованных входных данных результат совпадает с любым другим путём
    в пределах толерантности. Выведенные курсы не кэшируются.

    Рёбра хранятся списком смежности, который пополняется при каждой
    записи заданного курса, поэтому один запрос стоит O(n + e).
"""

import logging
from collections import deque
from collections.abc import Hashable, Iterable
from typing import TYPE_CHECKING, Union

from fxmatrix.core.domain.amounts import CurrencyAmount, MultipleCurrencyAmount
from fxmatrix.core.domain.currency import Currency
from fxmatrix.core.errors import AlreadyPresent, InvalidArgument, NoRateAvailable, UnknownCurrency
from fxmatrix.matrix.arguments import check_currency, check_pair, check_rate
from fxmatrix.matrix.config import ConsistencyConfig
from fxmatrix.matrix.consistency import check_rates_are_consistent
from fxmatrix.matrix.conversion import convert
from fxmatrix.matrix.protocols import FxMatrixGrowth, FxMatrixUpdate
from fxmatrix.matrix.storage import UNSET_RATE, CurrencyIndex, RateStore, SuppliedFlags
from fxmatrix.matrix.unchecked import load_rate_table

if TYPE_CHECKING:
    from fxmatrix.matrix.immutable import ImmutableCheckedFxMatrix

logger = logging.getLogger(__name__)


class CheckedFxMatrix(FxMatrixGrowth, FxMatrixUpdate):
    """
    Разреженная FX-матрица с выводом кросс-курсов и проверкой согласованности.

    Равенство: тот же тип, тот же порядок валют и та же таблица курсов.
    Флаги supplied в равенстве не участвуют: две матрицы с одинаковыми
    числами неразличимы, даже если "происхождение" курсов разное.
    """

    def __init__(self, config: ConsistencyConfig | None = None) -> None:
        self.config = config or ConsistencyConfig.legacy()
        self._index = CurrencyIndex()
        self._rates = RateStore()
        self._supplied = SuppliedFlags()
        # индекс -> индексы валют, с которыми у него есть заданный курс
        self._neighbours: list[set[int]] = []

    @classmethod
    def of(cls, config: ConsistencyConfig | None = None) -> "CheckedFxMatrix":
        return cls(config)

    @classmethod
    def from_table(
        cls,
        currencies: Iterable[Hashable],
        rows: list[list[float]],
        supplied: list[list[bool]] | None = None,
        config: ConsistencyConfig | None = None,
    ) -> "CheckedFxMatrix":
        """
        Восстановление матрицы из валют, строк курсов и строк флагов.

        Если supplied не передан, заданной считается каждая ячейка с курсом.

        Raises:
            InvalidArgument: Несогласованная форма строк или флаг True
                             для ячейки без курса
        """
        matrix = cls(config)
        load_rate_table(matrix._index, matrix._rates, currencies, rows)
        size = len(matrix._index)
        matrix._supplied.grow(size)
        matrix._neighbours = [set() for _ in range(size)]
        if supplied is not None and len(supplied) != size:
            raise InvalidArgument(f"Expected {size} supplied rows, got {len(supplied)}")
        for p in range(size):
            flags_row = supplied[p] if supplied is not None else None
            if flags_row is not None and len(flags_row) != size - p - 1:
                raise InvalidArgument(
                    f"Supplied row {p} must have {size - p - 1} cells, got {len(flags_row)}"
                )
            for q in range(p + 1, size):
                has_rate = matrix._rates.get(p, q) != UNSET_RATE
                flag = has_rate if flags_row is None else bool(flags_row[q - p - 1])
                if flag and not has_rate:
                    raise InvalidArgument(f"Cell ({p}, {q}) is flagged as supplied but has no rate")
                matrix._supplied.set(p, q, flag)
                if flag:
                    matrix._link(p, q)
        return matrix

    # -------------------------------------------------------------------------
    # Мутации
    # -------------------------------------------------------------------------

    def add_currency(self, numerator: Hashable, denominator: Hashable, fx_rate: float) -> None:
        """
        Добавление прямого курса numerator/denominator.

        Для пары, известной только как выводимая, новый курс сверяется с
        выведенным; если вывести курс нельзя, курс записывается как есть.

        Raises:
            InvalidArgument: None-валюта, numerator == denominator, rate <= 0
            AlreadyPresent: Для пары уже задан прямой курс
            InconsistentRate: Курс расходится с выводимым
        """
        check_pair(numerator, denominator)
        check_rate(fx_rate)
        numerator_index = self._index.index_of(numerator)
        denominator_index = self._index.index_of(denominator)

        if numerator_index is not None and denominator_index is not None:
            if self._supplied.is_supplied(numerator_index, denominator_index):
                raise AlreadyPresent(numerator, denominator)
            self._check_against_implied(
                numerator, denominator, numerator_index, denominator_index, fx_rate
            )
            self._store(numerator_index, denominator_index, fx_rate)
            return

        if numerator_index is None and denominator_index is None:
            denominator_index = self._index.append(denominator)
            numerator_index = self._index.append(numerator)
            self._grow(2)
        elif numerator_index is None:
            numerator_index = self._index.append(numerator)
            self._grow(1)
        else:
            denominator_index = self._index.append(denominator)
            self._grow(1)
        self._store(numerator_index, denominator_index, fx_rate)
        logger.debug(
            "added %s/%s=%s, matrix now has %d currencies",
            numerator, denominator, fx_rate, len(self._index),
        )

    def update_rates(self, numerator: Hashable, denominator: Hashable, fx_rate: float) -> None:
        """
        Изменение курса существующей пары с проверкой согласованности.

        Новый курс сверяется с текущим (прямым или выведенным). Курс пары
        без прямого значения и без пути в графе записывается как есть.

        Raises:
            InvalidArgument: None-валюта, numerator == denominator, rate <= 0
            UnknownCurrency: Валюта не добавлялась в матрицу
            InconsistentRate: Курс расходится с текущим
        """
        check_pair(numerator, denominator)
        check_rate(fx_rate)
        numerator_index, denominator_index = self._indices(numerator, denominator)
        self._check_against_implied(
            numerator, denominator, numerator_index, denominator_index, fx_rate
        )
        self._store(numerator_index, denominator_index, fx_rate)

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    def get_fx_rate(self, numerator: Hashable, denominator: Hashable) -> float:
        """
        Курс numerator/denominator: прямой или выведенный через граф.

        Returns:
            1.0 для numerator == denominator (даже для валют вне матрицы)

        Raises:
            InvalidArgument: None-валюта
            UnknownCurrency: Валюта не добавлялась в матрицу
            NoRateAvailable: Пары нет в связной компоненте графа
        """
        check_currency(numerator, "numerator")
        check_currency(denominator, "denominator")
        if numerator == denominator:
            return 1.0
        numerator_index, denominator_index = self._indices(numerator, denominator)
        rate = self._resolve(numerator_index, denominator_index)
        if rate is None:
            raise NoRateAvailable(
                numerator, denominator, "could not find supplied rates that produce it"
            )
        return rate

    def is_supplied(self, numerator: Hashable, denominator: Hashable) -> bool:
        """
        Задан ли курс пары напрямую.

        Raises:
            UnknownCurrency: Валюта не добавлялась в матрицу
        """
        check_pair(numerator, denominator)
        numerator_index, denominator_index = self._indices(numerator, denominator)
        return self._supplied.is_supplied(numerator_index, denominator_index)

    def contains_pair(self, ccy1: Hashable, ccy2: Hashable) -> bool:
        try:
            self.get_fx_rate(ccy1, ccy2)
        except (UnknownCurrency, NoRateAvailable):
            return False
        return True

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
        """Копия таблицы прямых курсов (выведенные курсы не хранятся)."""
        return self._rates.rows()

    @property
    def supplied_flags(self) -> list[list[bool]]:
        """Копия таблицы флагов supplied той же формы, что fx_rates."""
        return self._supplied.rows()

    def as_immutable(self) -> "ImmutableCheckedFxMatrix":
        from fxmatrix.matrix.immutable import ImmutableCheckedFxMatrix

        return ImmutableCheckedFxMatrix.of(self)

    # -------------------------------------------------------------------------
    # Внутренние операции
    # -------------------------------------------------------------------------

    def _indices(self, numerator: Hashable, denominator: Hashable) -> tuple[int, int]:
        numerator_index = self._index.index_of(numerator)
        if numerator_index is None:
            raise UnknownCurrency(numerator)
        denominator_index = self._index.index_of(denominator)
        if denominator_index is None:
            raise UnknownCurrency(denominator)
        return numerator_index, denominator_index

    def _grow(self, count: int) -> None:
        self._rates.grow(count)
        self._supplied.grow(count)
        self._neighbours.extend(set() for _ in range(count))

    def _store(self, numerator_index: int, denominator_index: int, fx_rate: float) -> None:
        self._rates.put(numerator_index, denominator_index, fx_rate)
        self._supplied.mark(numerator_index, denominator_index)
        self._link(numerator_index, denominator_index)

    def _link(self, index_a: int, index_b: int) -> None:
        self._neighbours[index_a].add(index_b)
        self._neighbours[index_b].add(index_a)

    def _check_against_implied(
        self,
        numerator: Hashable,
        denominator: Hashable,
        numerator_index: int,
        denominator_index: int,
        fx_rate: float,
    ) -> None:
        existing = self._resolve(numerator_index, denominator_index)
        if existing is None:
            return
        check_rates_are_consistent(numerator, denominator, fx_rate, existing, self.config)

    def _supplied_rate(self, numerator_index: int, denominator_index: int) -> float | None:
        if not self._supplied.is_supplied(numerator_index, denominator_index):
            return None
        return self._rates.rate(numerator_index, denominator_index)

    def _resolve(self, numerator_index: int, denominator_index: int) -> float | None:
        """Прямой курс или произведение вдоль кратчайшего пути в графе."""
        direct = self._supplied_rate(numerator_index, denominator_index)
        if direct is not None:
            return direct

        # rate_from[v] = rate(numerator, v)
        rate_from: dict[int, float] = {numerator_index: 1.0}
        previous: dict[int, int] = {}
        queue = deque([numerator_index])
        while queue:
            node = queue.popleft()
            for neighbour in sorted(self._neighbours[node]):
                if neighbour in rate_from:
                    continue
                edge = self._rates.rate(node, neighbour)
                rate_from[neighbour] = rate_from[node] * edge
                previous[neighbour] = node
                if neighbour == denominator_index:
                    if logger.isEnabledFor(logging.DEBUG):
                        logger.debug(
                            "implied %s/%s via %s",
                            self._index.currency_at(numerator_index),
                            self._index.currency_at(denominator_index),
                            self._path_repr(previous, numerator_index, denominator_index),
                        )
                    return rate_from[neighbour]
                queue.append(neighbour)
        return None

    def _path_repr(self, previous: dict[int, int], start: int, end: int) -> str:
        path = [end]
        while path[-1] != start:
            path.append(previous[path[-1]])
        return " -> ".join(str(self._index.currency_at(i)) for i in reversed(path))

    # -------------------------------------------------------------------------
    # Object protocol
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if type(other) is not type(self):
            return NotImplemented
        # supplied flags are not compared
        return self.currencies == other.currencies and self._rates == other._rates

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        codes = ", ".join(str(ccy) for ccy in self.currencies)
        return f"{type(self).__name__}([{codes}])"
