"""
Consistency — проверка согласованности нового курса с выводимым

Используется CheckedFxMatrix в add_currency (для пары без прямого курса)
и в update_rates.
"""

import logging
from collections.abc import Hashable

from fxmatrix.core.errors import InconsistentRate
from fxmatrix.core.math.numerical_safeguards import truncate_to_decimals
from fxmatrix.matrix.config import ConsistencyConfig

logger = logging.getLogger(__name__)


def rates_are_consistent(
    existing_rate: float,
    new_rate: float,
    decimals: int,
) -> bool:
    """
    Совпадают ли курсы после усечения до decimals знаков.

    Examples:
        >>> rates_are_consistent(1.2649999999999997, 1.2650, 2)
        True
        >>> rates_are_consistent(1.265, 2.0, 2)
        False
        >>> rates_are_consistent(1.2651, 1.2659, 2)
        True
        >>> rates_are_consistent(1.2651, 1.2659, 4)
        False
    """
    return truncate_to_decimals(existing_rate, decimals) == truncate_to_decimals(
        new_rate, decimals
    )


def check_rates_are_consistent(
    numerator: Hashable,
    denominator: Hashable,
    new_rate: float,
    existing_rate: float,
    config: ConsistencyConfig,
) -> None:
    """
    Проверка, что новый курс согласован с уже выводимым.

    Args:
        numerator: Валюта-числитель пары
        denominator: Валюта-знаменатель пары (определяет число знаков)
        new_rate: Предлагаемый курс numerator/denominator
        existing_rate: Курс, выводимый из уже заданных (прямой или кросс)
        config: Политика толерантности

    Raises:
        InconsistentRate: Если курсы различаются после усечения
    """
    decimals = config.decimals_for(denominator)
    if not rates_are_consistent(existing_rate, new_rate, decimals):
        logger.debug(
            "rejecting %s/%s: existing %.10g vs provided %.10g at %d d.p.",
            numerator, denominator, existing_rate, new_rate, decimals,
        )
        raise InconsistentRate(numerator, denominator, existing_rate, new_rate, decimals)
