"""
Storage — примитивы хранения FX-матрицы

- CurrencyIndex: append-only индекс валют (позиция присваивается при первом
  появлении и больше не меняется)
- TriangularTable: треугольная таблица, одна ячейка на каждую пару p < q
- RateStore: таблица курсов с sentinel UNSET_RATE и правилом ориентации
- SuppliedFlags: параллельная таблица флагов "курс задан напрямую"

РАСКЛАДКА (column-major, append-only):
    offset(p, q) = q * (q - 1) / 2 + p,   0 <= p < q < size

    Добавление валюты с индексом q дописывает q ячеек (столбец q) в конец
    плоского списка. Существующие смещения не меняются, рост O(1) амортизированно
    на ячейку, без перераспределения строк.

ИНВАРИАНТ КУРСА:
    cell(p, q) = количество валюты q за одну единицу валюты p ("q per p")

    rate(a, b) = cell(b, a)       если a > b
    rate(a, b) = 1 / cell(a, b)   если a < b
"""

from collections.abc import Hashable, Iterator
from typing import Final, Generic, TypeVar

# Sentinel "курс неизвестен": недопустимое значение курса (курсы > 0)
UNSET_RATE: Final[float] = -1.0

T = TypeVar("T")


# =============================================================================
# CURRENCY INDEX
# =============================================================================


class CurrencyIndex:
    """
    Append-only упорядоченная последовательность различных валют.

    Инвариант: индекс валюты никогда не меняется после присвоения.
    """

    def __init__(self) -> None:
        self._currencies: list[Hashable] = []
        self._positions: dict[Hashable, int] = {}

    def index_of(self, currency: Hashable) -> int | None:
        """Индекс валюты или None, если валюта не добавлялась."""
        return self._positions.get(currency)

    def append(self, currency: Hashable) -> int:
        """
        Добавление новой валюты в конец индекса.

        Raises:
            ValueError: Если валюта уже есть в индексе
        """
        if currency in self._positions:
            raise ValueError(f"{currency} is already indexed")
        position = len(self._currencies)
        self._currencies.append(currency)
        self._positions[currency] = position
        return position

    def currency_at(self, position: int) -> Hashable:
        return self._currencies[position]

    @property
    def currencies(self) -> tuple:
        return tuple(self._currencies)

    def copy(self) -> "CurrencyIndex":
        clone = CurrencyIndex()
        clone._currencies = list(self._currencies)
        clone._positions = dict(self._positions)
        return clone

    def __len__(self) -> int:
        return len(self._currencies)

    def __contains__(self, currency: object) -> bool:
        return currency in self._positions

    def __iter__(self) -> Iterator:
        return iter(self._currencies)


# =============================================================================
# TRIANGULAR TABLE
# =============================================================================


def triangular_offset(p: int, q: int) -> int:
    """
    Смещение ячейки (p, q) в плоском column-major массиве.

    Examples:
        >>> triangular_offset(0, 1)
        0
        >>> triangular_offset(0, 2), triangular_offset(1, 2)
        (1, 2)
        >>> triangular_offset(2, 3)
        5
    """
    return q * (q - 1) // 2 + p


class TriangularTable(Generic[T]):
    """
    Строго верхнетреугольная таблица size x size без диагонали.

    Новые ячейки при росте заполняются значением fill.
    """

    def __init__(self, fill: T) -> None:
        self._fill = fill
        self._cells: list[T] = []
        self._size = 0

    @property
    def size(self) -> int:
        return self._size

    def grow(self, count: int = 1) -> None:
        """Добавление count новых индексов (столбцов), заполненных fill."""
        for _ in range(count):
            self._cells.extend([self._fill] * self._size)
            self._size += 1

    def _offset(self, p: int, q: int) -> int:
        if not 0 <= p < q < self._size:
            raise IndexError(f"cell ({p}, {q}) outside table of size {self._size}")
        return triangular_offset(p, q)

    def get(self, p: int, q: int) -> T:
        return self._cells[self._offset(p, q)]

    def set(self, p: int, q: int, value: T) -> None:
        self._cells[self._offset(p, q)] = value

    def rows(self) -> list[list[T]]:
        """
        Рваные строки: строка p содержит cell(p, q) для q = p+1 .. size-1.

        Последняя строка всегда пустая.
        """
        return [
            [self._cells[triangular_offset(p, q)] for q in range(p + 1, self._size)]
            for p in range(self._size)
        ]

    def copy(self) -> "TriangularTable[T]":
        clone = type(self).__new__(type(self))
        clone._fill = self._fill
        clone._cells = list(self._cells)
        clone._size = self._size
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TriangularTable):
            return NotImplemented
        return self._size == other._size and self._cells == other._cells

    __hash__ = None  # mutable


# =============================================================================
# RATE STORE
# =============================================================================


class RateStore(TriangularTable[float]):
    """Треугольная таблица курсов с правилом ориентации numerator/denominator."""

    def __init__(self) -> None:
        super().__init__(UNSET_RATE)

    @staticmethod
    def oriented(numerator_index: int, denominator_index: int) -> tuple[int, int, bool]:
        """
        Ячейка для пары (numerator, denominator).

        Returns:
            (p, q, inverted): p < q; inverted=True если курс пары = 1 / cell(p, q)
        """
        if numerator_index > denominator_index:
            return denominator_index, numerator_index, False
        return numerator_index, denominator_index, True

    def is_set(self, numerator_index: int, denominator_index: int) -> bool:
        p, q, _ = self.oriented(numerator_index, denominator_index)
        return self.get(p, q) != UNSET_RATE

    def rate(self, numerator_index: int, denominator_index: int) -> float | None:
        """Курс numerator/denominator или None для незаданной ячейки."""
        p, q, inverted = self.oriented(numerator_index, denominator_index)
        cell = self.get(p, q)
        if cell == UNSET_RATE:
            return None
        return 1.0 / cell if inverted else cell

    def put(self, numerator_index: int, denominator_index: int, rate: float) -> None:
        """Запись курса numerator/denominator с учётом ориентации ячейки."""
        p, q, inverted = self.oriented(numerator_index, denominator_index)
        self.set(p, q, 1.0 / rate if inverted else rate)


# =============================================================================
# SUPPLIED FLAGS
# =============================================================================


class SuppliedFlags(TriangularTable[bool]):
    """Флаги "ячейка задана напрямую" той же формы, что RateStore."""

    def __init__(self) -> None:
        super().__init__(False)

    def is_supplied(self, index_a: int, index_b: int) -> bool:
        p, q = min(index_a, index_b), max(index_a, index_b)
        return self.get(p, q)

    def mark(self, index_a: int, index_b: int, supplied: bool = True) -> None:
        p, q = min(index_a, index_b), max(index_a, index_b)
        self.set(p, q, supplied)
