"""Проверки аргументов, общие для всех FX-матриц.

Все проверки выполняются до любой мутации, поэтому неудачный вызов
оставляет матрицу без изменений.
"""

from collections.abc import Hashable

from fxmatrix.core.errors import InvalidArgument
from fxmatrix.core.math.numerical_safeguards import is_positive_rate


def check_currency(currency: Hashable, name: str) -> None:
    if currency is None:
        raise InvalidArgument(f"{name} must not be None")


def check_pair(numerator: Hashable, denominator: Hashable) -> None:
    check_currency(numerator, "numerator")
    check_currency(denominator, "denominator")
    if numerator == denominator:
        raise InvalidArgument(
            f"Cannot have equal numerator and denominator currency: {numerator}"
        )


def check_rate(fx_rate: float) -> None:
    """
    Raises:
        InvalidArgument: Если курс не число, <= 0, NaN или Inf
    """
    if isinstance(fx_rate, bool) or not isinstance(fx_rate, (int, float)):
        raise InvalidArgument(f"FX rate must be a number: have {fx_rate!r}")
    if not is_positive_rate(float(fx_rate)):
        raise InvalidArgument(f"FX rate must be greater than zero: have {fx_rate}")
