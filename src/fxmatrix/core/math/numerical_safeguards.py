"""
Numerical Safeguards — Safe Math Primitives для FX-курсов

Модуль обеспечивает численную устойчивость операций с курсами:
- NaN/Inf проверки для входных курсов и сумм
- Epsilon-защита при усечении курса до N знаков после запятой
- Валидация положительности курса

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не попадают в матрицу курсов
2. Усечение устойчиво к ошибке двоичного представления float
   (4.35 * 100 = 434.99999999999994 усекается до 435 при 2 знаках)
3. Все операции детерминированы и воспроизводимы
"""

import math
from typing import Final

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность для сравнения float
# Используется как поправка при усечении до фиксированного числа знаков
EPS_FLOAT_COMPARE_REL: Final[float] = 1e-9


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def is_positive_rate(value: float) -> bool:
    """
    Проверка, что значение пригодно как FX-курс: finite и строго > 0.

    Examples:
        >>> is_positive_rate(1.2)
        True
        >>> is_positive_rate(0.0)
        False
        >>> is_positive_rate(float('inf'))
        False
    """
    return is_valid_float(value) and value > 0


# =============================================================================
# УСЕЧЕНИЕ С EPSILON-ЗАЩИТОЙ
# =============================================================================


def truncate_to_decimals(
    value: float,
    decimals: int,
    rel_tol: float = EPS_FLOAT_COMPARE_REL,
) -> int:
    """
    Усечение значения до `decimals` знаков, результат в целых единицах шага.

    Эквивалент (int)(value * 10**decimals) с epsilon-поправкой: значение
    сдвигается к нулю от ближайшей границы шага не более чем на rel_tol,
    поэтому результат не зависит от ошибки представления float.

    Args:
        value: Исходное значение (обычно положительный курс)
        decimals: Количество знаков после запятой (>= 0)
        rel_tol: Относительная поправка (default: EPS_FLOAT_COMPARE_REL)

    Returns:
        Целое число шагов 10**-decimals

    Raises:
        ValueError: Если decimals < 0 или value NaN/Inf

    Examples:
        >>> truncate_to_decimals(1.2649999999999997, 4)
        12650
        >>> truncate_to_decimals(1.2649999999999997, 2)
        126
        >>> truncate_to_decimals(2.0, 2)
        200
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")
    if not is_valid_float(value):
        raise ValueError(f"value must be a valid float (not NaN/Inf), got {value}")

    scaled = value * (10 ** decimals)
    nudged = scaled + math.copysign(abs(scaled) * rel_tol, scaled)
    return math.trunc(nudged)
