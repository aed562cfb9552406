"""
Тесты для CheckedFxMatrix

Проверяет:
1. Вывод кросс-курсов через граф заданных пар (в т.ч. многошаговый)
2. Различие supplied / implied и AlreadyPresent
3. Проверку согласованности (legacy и strict толерантность, JPY)
4. update_rates с проверкой
5. Равенство без учёта флагов supplied
"""

import logging

import pytest

from fxmatrix.core.domain import AUD, CHF, EUR, GBP, JPY, NZD, USD, Currency, MultipleCurrencyAmount
from fxmatrix.core.errors import (
    AlreadyPresent,
    InconsistentRate,
    InvalidArgument,
    NoRateAvailable,
    UnknownCurrency,
)
from fxmatrix.matrix import CheckedFxMatrix, ConsistencyConfig


@pytest.fixture
def triangle() -> CheckedFxMatrix:
    """USD/EUR и EUR/GBP заданы, USD/GBP выводится"""
    m = CheckedFxMatrix.of()
    m.add_currency(USD, EUR, 1.1)
    m.add_currency(EUR, GBP, 1.15)
    return m


@pytest.fixture
def disconnected() -> CheckedFxMatrix:
    """Две несвязные компоненты: {USD, EUR} и {GBP, CHF}"""
    m = CheckedFxMatrix()
    m.add_currency(USD, EUR, 1.1)
    m.add_currency(GBP, CHF, 0.9)
    return m


# =============================================================================
# ВЫВОД КРОСС-КУРСОВ
# =============================================================================


class TestImpliedRates:
    """Тесты вывода кросс-курсов"""

    def test_cross_rate_through_common_currency(self, triangle: CheckedFxMatrix) -> None:
        assert triangle.get_fx_rate(USD, GBP) == pytest.approx(1.1 * 1.15)
        assert triangle.get_fx_rate(GBP, USD) == pytest.approx(1 / (1.1 * 1.15))

    def test_direct_rates_unchanged(self, triangle: CheckedFxMatrix) -> None:
        assert triangle.get_fx_rate(USD, EUR) == 1.1
        assert triangle.get_fx_rate(EUR, GBP) == pytest.approx(1.15)

    def test_identity(self, triangle: CheckedFxMatrix) -> None:
        assert triangle.get_fx_rate(GBP, GBP) == 1.0
        assert triangle.get_fx_rate(JPY, JPY) == 1.0

    def test_multi_hop_chain(self) -> None:
        m = CheckedFxMatrix()
        m.add_currency(USD, EUR, 1.1)
        m.add_currency(EUR, GBP, 1.15)
        m.add_currency(GBP, CHF, 1.2)
        m.add_currency(CHF, JPY, 0.006)
        assert m.get_fx_rate(USD, JPY) == pytest.approx(1.1 * 1.15 * 1.2 * 0.006)
        assert m.get_fx_rate(JPY, USD) == pytest.approx(1 / (1.1 * 1.15 * 1.2 * 0.006))

    def test_star_around_usd(self) -> None:
        m = CheckedFxMatrix()
        m.add_currency(EUR, USD, 0.9)
        m.add_currency(GBP, USD, 0.8)
        m.add_currency(AUD, USD, 1.5)
        assert m.get_fx_rate(AUD, GBP) == pytest.approx(1.5 / 0.8)
        assert m.get_fx_rate(EUR, AUD) == pytest.approx(0.9 / 1.5)

    def test_long_chain(self) -> None:
        codes = [
            Currency.of(f"X{first}{second}") for first in "ABC" for second in "ABCDEFGHIJKLMNOPQRST"
        ]
        m = CheckedFxMatrix()
        for numerator, denominator in zip(codes, codes[1:]):
            m.add_currency(numerator, denominator, 1.01)
        assert m.get_fx_rate(codes[0], codes[-1]) == pytest.approx(1.01 ** (len(codes) - 1))
        snapshot = m.as_immutable()
        assert snapshot.get_fx_rate(codes[-1], codes[0]) == pytest.approx(1.01 ** -(len(codes) - 1))

    def test_restored_matrix_infers_through_restored_edges(self) -> None:
        m = CheckedFxMatrix.from_table(
            [EUR, USD, GBP], [[1.1, 1 / 1.15], [-1.0], []], supplied=[[True, True], [False], []]
        )
        assert m.get_fx_rate(USD, GBP) == pytest.approx(1.1 * 1.15)
        unsupplied = CheckedFxMatrix.from_table(
            [EUR, USD, GBP], [[1.1, 1 / 1.15], [-1.0], []], supplied=[[True, False], [False], []]
        )
        assert not unsupplied.contains_pair(USD, GBP)

    def test_disconnected_components(self, disconnected: CheckedFxMatrix) -> None:
        with pytest.raises(NoRateAvailable, match="could not find supplied rates"):
            disconnected.get_fx_rate(USD, GBP)
        assert not disconnected.contains_pair(USD, GBP)
        assert disconnected.contains_pair(GBP, CHF)

    def test_unknown_currency(self, triangle: CheckedFxMatrix) -> None:
        with pytest.raises(UnknownCurrency):
            triangle.get_fx_rate(USD, NZD)
        assert not triangle.contains_pair(USD, NZD)

    def test_implied_rates_not_stored(self, triangle: CheckedFxMatrix) -> None:
        triangle.get_fx_rate(USD, GBP)
        assert triangle.fx_rates[1][0] == -1.0
        assert not triangle.is_supplied(USD, GBP)

    def test_path_logged_at_debug(self, triangle: CheckedFxMatrix, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="fxmatrix.matrix.checked"):
            triangle.get_fx_rate(USD, GBP)
        assert "USD -> EUR -> GBP" in caplog.text


# =============================================================================
# ADD CURRENCY
# =============================================================================


class TestAddCurrency:
    """Тесты add_currency для Checked-матрицы"""

    def test_layout_matches_unchecked(self, triangle: CheckedFxMatrix) -> None:
        assert triangle.currencies == (EUR, USD, GBP)
        assert triangle.supplied_flags == [[True, True], [False], []]

    def test_duplicate_direct_supply_raises(self) -> None:
        m = CheckedFxMatrix()
        m.add_currency(USD, EUR, 1.1)
        with pytest.raises(AlreadyPresent, match="USD/EUR"):
            m.add_currency(USD, EUR, 1.1)

    def test_supplied_pair_raises(self, triangle: CheckedFxMatrix) -> None:
        with pytest.raises(AlreadyPresent):
            triangle.add_currency(EUR, USD, 1 / 1.1)

    def test_consistent_implied_pair_accepted(self, triangle: CheckedFxMatrix) -> None:
        triangle.add_currency(USD, GBP, 1.2650)
        assert triangle.is_supplied(USD, GBP)
        assert triangle.get_fx_rate(USD, GBP) == pytest.approx(1.2650)

    def test_inconsistent_implied_pair_rejected(self, triangle: CheckedFxMatrix) -> None:
        with pytest.raises(InconsistentRate, match="USD/GBP") as exc_info:
            triangle.add_currency(USD, GBP, 2.00)
        assert exc_info.value.decimals == 2
        assert exc_info.value.new_rate == 2.00
        assert not triangle.is_supplied(USD, GBP)

    def test_now_supplied_pair_raises(self, triangle: CheckedFxMatrix) -> None:
        triangle.add_currency(USD, GBP, 1.2650)
        with pytest.raises(AlreadyPresent):
            triangle.add_currency(GBP, USD, 0.79)

    def test_pair_without_path_stored_as_is(self, disconnected: CheckedFxMatrix) -> None:
        disconnected.add_currency(EUR, GBP, 1.15)
        assert disconnected.is_supplied(EUR, GBP)
        assert disconnected.get_fx_rate(USD, CHF) == pytest.approx(1.1 * 1.15 * 0.9)

    def test_invalid_arguments(self, triangle: CheckedFxMatrix) -> None:
        with pytest.raises(InvalidArgument):
            triangle.add_currency(USD, USD, 1.0)
        with pytest.raises(InvalidArgument):
            triangle.add_currency(USD, NZD, -2.0)
        assert NZD not in triangle.currencies


# =============================================================================
# CONSISTENCY POLICY
# =============================================================================


class TestConsistencyPolicy:
    """Толерантность сравнения курсов"""

    def test_legacy_is_default(self) -> None:
        assert CheckedFxMatrix().config == ConsistencyConfig.legacy()

    def test_legacy_ignores_third_decimal(self, triangle: CheckedFxMatrix) -> None:
        triangle.add_currency(USD, GBP, 1.2699)
        assert triangle.is_supplied(USD, GBP)

    def test_strict_compares_four_decimals(self) -> None:
        m = CheckedFxMatrix(ConsistencyConfig.strict())
        m.add_currency(USD, EUR, 1.1)
        m.add_currency(EUR, GBP, 1.15)
        with pytest.raises(InconsistentRate) as exc_info:
            m.add_currency(USD, GBP, 1.2660)
        assert exc_info.value.decimals == 4
        m.add_currency(USD, GBP, 1.2650)
        assert m.is_supplied(USD, GBP)

    def test_jpy_denominator_uses_jpy_decimals(self) -> None:
        # implied EUR/JPY = 1 / 165 = 0.0060606...
        loose = CheckedFxMatrix(ConsistencyConfig.strict())
        loose.add_currency(USD, EUR, 1.1)
        loose.add_currency(JPY, USD, 150.0)
        loose.add_currency(EUR, JPY, 0.0061)
        assert loose.is_supplied(EUR, JPY)

        tight = CheckedFxMatrix(ConsistencyConfig(default_decimals=2, jpy_decimals=4))
        tight.add_currency(USD, EUR, 1.1)
        tight.add_currency(JPY, USD, 150.0)
        with pytest.raises(InconsistentRate):
            tight.add_currency(EUR, JPY, 0.0061)


# =============================================================================
# UPDATE RATES
# =============================================================================


class TestUpdateRates:
    """Тесты update_rates для Checked-матрицы"""

    def test_consistent_update_accepted(self, triangle: CheckedFxMatrix) -> None:
        triangle.update_rates(USD, EUR, 1.1049)
        assert triangle.get_fx_rate(USD, EUR) == 1.1049

    def test_inconsistent_update_rejected(self, triangle: CheckedFxMatrix) -> None:
        with pytest.raises(InconsistentRate):
            triangle.update_rates(USD, EUR, 1.5)
        assert triangle.get_fx_rate(USD, EUR) == 1.1

    def test_update_implied_pair_checked(self, triangle: CheckedFxMatrix) -> None:
        with pytest.raises(InconsistentRate):
            triangle.update_rates(GBP, USD, 0.5)
        triangle.update_rates(GBP, USD, 1 / 1.265)
        assert triangle.is_supplied(GBP, USD)

    def test_update_connects_components(self, disconnected: CheckedFxMatrix) -> None:
        disconnected.update_rates(USD, GBP, 1.3)
        assert disconnected.get_fx_rate(EUR, CHF) == pytest.approx(1.3 / 1.1 * 0.9)

    def test_unknown_currency(self, triangle: CheckedFxMatrix) -> None:
        with pytest.raises(UnknownCurrency):
            triangle.update_rates(USD, NZD, 1.6)


# =============================================================================
# CONVERT / OBJECT PROTOCOL
# =============================================================================


class TestCheckedObjectProtocol:
    """Конвертация, равенство, хеш, repr, from_table"""

    def test_convert_uses_implied_rates(self, triangle: CheckedFxMatrix) -> None:
        result = triangle.convert(MultipleCurrencyAmount.of({GBP: 100.0, USD: 10.0}), USD)
        assert result.amount == pytest.approx(100.0 * 1.1 * 1.15 + 10.0)

    def test_equality_ignores_supplied_flags(self) -> None:
        a = CheckedFxMatrix()
        a.add_currency(USD, EUR, 1.1)
        b = CheckedFxMatrix.from_table([EUR, USD], [[1.1], []], supplied=[[False], []])
        assert not b.is_supplied(USD, EUR)
        assert a == b

    def test_not_equal_to_unchecked(self) -> None:
        from fxmatrix.matrix import UncheckedFxMatrix

        a = CheckedFxMatrix()
        a.add_currency(USD, EUR, 1.1)
        b = UncheckedFxMatrix()
        b.add_currency(USD, EUR, 1.1)
        assert a != b

    def test_unhashable(self, triangle: CheckedFxMatrix) -> None:
        with pytest.raises(TypeError):
            hash(triangle)

    def test_repr(self, triangle: CheckedFxMatrix) -> None:
        assert repr(triangle) == "CheckedFxMatrix([EUR, USD, GBP])"

    def test_from_table_defaults_supplied_to_set_cells(self, triangle: CheckedFxMatrix) -> None:
        restored = CheckedFxMatrix.from_table(triangle.currencies, triangle.fx_rates)
        assert restored.supplied_flags == triangle.supplied_flags
        assert restored.get_fx_rate(USD, GBP) == pytest.approx(1.1 * 1.15)

    def test_from_table_supplied_without_rate_rejected(self) -> None:
        with pytest.raises(InvalidArgument, match="flagged as supplied"):
            CheckedFxMatrix.from_table([EUR, USD], [[-1.0], []], supplied=[[True], []])
