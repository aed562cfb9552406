"""
Тесты для проверки согласованности курсов

Проверяет:
1. rates_are_consistent при разной точности
2. ConsistencyConfig: пресеты, выбор точности по denominator, валидацию
3. InconsistentRate и его атрибуты
"""

import dataclasses
import logging

import pytest

from fxmatrix.core.domain import EUR, GBP, JPY, USD
from fxmatrix.core.errors import FxMatrixError, InconsistentRate
from fxmatrix.matrix import ConsistencyConfig, check_rates_are_consistent, rates_are_consistent


class TestRatesAreConsistent:
    """Тесты для rates_are_consistent"""

    def test_float_product_matches_quoted_rate(self) -> None:
        assert rates_are_consistent(1.1 * 1.15, 1.2650, 2)
        assert rates_are_consistent(1.1 * 1.15, 1.2650, 4)

    def test_different_at_precision(self) -> None:
        assert not rates_are_consistent(1.1 * 1.15, 2.00, 2)
        assert not rates_are_consistent(1.2651, 1.2659, 4)

    def test_equal_at_lower_precision(self) -> None:
        assert rates_are_consistent(1.2651, 1.2659, 2)


class TestConsistencyConfig:
    """Тесты для ConsistencyConfig"""

    def test_legacy(self) -> None:
        config = ConsistencyConfig.legacy()
        assert config.decimals_for(GBP) == 2
        assert config.decimals_for(JPY) == 2
        assert config == ConsistencyConfig()

    def test_strict(self) -> None:
        config = ConsistencyConfig.strict()
        assert config.decimals_for(EUR) == 4
        assert config.decimals_for(JPY) == 2

    def test_custom_jpy_currencies(self) -> None:
        config = ConsistencyConfig(default_decimals=4, jpy_decimals=1, jpy_currencies=frozenset({USD}))
        assert config.decimals_for(USD) == 1
        assert config.decimals_for(JPY) == 4

    def test_negative_decimals_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            ConsistencyConfig(default_decimals=-1)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            ConsistencyConfig.legacy().default_decimals = 6


class TestCheckRatesAreConsistent:
    """Тесты для check_rates_are_consistent"""

    def test_consistent_passes(self) -> None:
        check_rates_are_consistent(USD, GBP, 1.2650, 1.1 * 1.15, ConsistencyConfig.strict())

    def test_inconsistent_raises_with_details(self, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="fxmatrix.matrix.consistency"):
            with pytest.raises(InconsistentRate) as exc_info:
                check_rates_are_consistent(USD, JPY, 150.0, 110.0, ConsistencyConfig.strict())
        error = exc_info.value
        assert error.numerator == USD
        assert error.denominator == JPY
        assert error.existing_rate == 110.0
        assert error.new_rate == 150.0
        assert error.decimals == 2
        assert "inconsistent with the provided rate 150.0" in str(error)
        assert isinstance(error, FxMatrixError)
        assert isinstance(error, ValueError)
        assert "rejecting USD/JPY" in caplog.text
