"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. NaN/Inf проверки
2. Валидацию положительности курса
3. Усечение до N знаков с epsilon-поправкой
"""

import math

import pytest

from fxmatrix.core.math.numerical_safeguards import (
    EPS_FLOAT_COMPARE_REL,
    is_positive_rate,
    is_valid_float,
    truncate_to_decimals,
)


# =============================================================================
# ТЕСТЫ NaN/Inf
# =============================================================================


class TestIsValidFloat:
    """Тесты для is_valid_float"""

    def test_finite_values_valid(self) -> None:
        assert is_valid_float(0.0)
        assert is_valid_float(-1.5)
        assert is_valid_float(1e300)

    def test_nan_and_inf_invalid(self) -> None:
        assert not is_valid_float(math.nan)
        assert not is_valid_float(math.inf)
        assert not is_valid_float(-math.inf)


class TestIsPositiveRate:
    """Тесты для is_positive_rate"""

    def test_positive_finite_accepted(self) -> None:
        assert is_positive_rate(1.2)
        assert is_positive_rate(1e-12)

    def test_zero_and_negative_rejected(self) -> None:
        assert not is_positive_rate(0.0)
        assert not is_positive_rate(-0.0)
        assert not is_positive_rate(-1.0)

    def test_non_finite_rejected(self) -> None:
        assert not is_positive_rate(math.nan)
        assert not is_positive_rate(math.inf)


# =============================================================================
# ТЕСТЫ УСЕЧЕНИЯ
# =============================================================================


class TestTruncateToDecimals:
    """Тесты для truncate_to_decimals"""

    def test_exact_values(self) -> None:
        assert truncate_to_decimals(2.0, 2) == 200
        assert truncate_to_decimals(1.2659, 2) == 126
        assert truncate_to_decimals(1.2659, 0) == 1

    def test_truncates_not_rounds(self) -> None:
        """0.999 при 2 знаках -> 99, не 100"""
        assert truncate_to_decimals(0.999, 2) == 99

    def test_representation_error_absorbed(self) -> None:
        """4.35 * 100 в float чуть меньше 435, но усекается как 435"""
        assert 4.35 * 100 < 435
        assert truncate_to_decimals(4.35, 2) == 435
        assert truncate_to_decimals(4.35, 2, rel_tol=0.0) == 434

    def test_product_of_quotes(self) -> None:
        """Произведение котировок сравнивается с котировкой пересечения"""
        assert truncate_to_decimals(1.1 * 1.15, 4) == 12650
        assert truncate_to_decimals(1.2649999999999997, 4) == 12650

    def test_nudge_does_not_cross_real_boundaries(self) -> None:
        """Поправка не "перепрыгивает" заметно меньшие значения"""
        assert truncate_to_decimals(1.26499, 4) == 12649

    def test_negative_values_symmetric(self) -> None:
        assert truncate_to_decimals(-1.2659, 2) == -126

    def test_negative_decimals_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            truncate_to_decimals(1.0, -1)

    def test_non_finite_raises(self) -> None:
        with pytest.raises(ValueError, match="NaN/Inf"):
            truncate_to_decimals(math.nan, 2)
        with pytest.raises(ValueError, match="NaN/Inf"):
            truncate_to_decimals(math.inf, 2)


class TestEpsilonConstants:
    """Epsilon-параметры"""

    def test_relative_epsilon_small(self) -> None:
        assert 0 < EPS_FLOAT_COMPARE_REL < 1e-6
