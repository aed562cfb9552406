"""
Protocols — capability-интерфейсы FX-матриц

- FxRateLookup: чтение курсов и списка валют (все четыре типа матриц),
  структурный Protocol
- FxMatrixGrowth: добавление новых пар
- FxMatrixUpdate: изменение курсов существующих пар

FxMatrixGrowth/FxMatrixUpdate номинальные (ABC): их наследуют только
UncheckedFxMatrix и CheckedFxMatrix. Снапшоты сохраняют сигнатуры
add_currency/update_rates, но не являются FxMatrixGrowth/FxMatrixUpdate,
и любой вызов завершается ImmutableViolation.
"""

from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Protocol, runtime_checkable


@runtime_checkable
class FxRateLookup(Protocol):
    @property
    def currencies(self) -> tuple: ...

    def get_fx_rate(self, numerator: Hashable, denominator: Hashable) -> float: ...

    def contains_pair(self, ccy1: Hashable, ccy2: Hashable) -> bool: ...


class FxMatrixGrowth(ABC):
    """Матрица, в которую можно добавлять новые пары."""

    __slots__ = ()

    @abstractmethod
    def add_currency(self, numerator: Hashable, denominator: Hashable, fx_rate: float) -> None:
        raise NotImplementedError


class FxMatrixUpdate(ABC):
    """Матрица, в которой можно менять курсы существующих пар."""

    __slots__ = ()

    @abstractmethod
    def update_rates(self, numerator: Hashable, denominator: Hashable, fx_rate: float) -> None:
        raise NotImplementedError
