"""
Тесты для convert

Проверяет:
1. Сумму Σ amount_i * rate(target, currency_i)
2. Пустой набор и совпадение валют
3. Прерывание на первой неразрешимой паре
"""

import pytest

from fxmatrix.core.domain import CHF, EUR, GBP, USD, CurrencyAmount, MultipleCurrencyAmount
from fxmatrix.core.errors import InvalidArgument, NoRateAvailable, UnknownCurrency
from fxmatrix.matrix import UncheckedFxMatrix, convert


@pytest.fixture
def matrix() -> UncheckedFxMatrix:
    """1 EUR = 1.2 USD"""
    m = UncheckedFxMatrix()
    m.add_currency(USD, EUR, 1.2)
    return m


class TestConvert:
    """Тесты для функции convert"""

    def test_single_amount(self, matrix: UncheckedFxMatrix) -> None:
        result = convert(matrix, MultipleCurrencyAmount.of({EUR: 100.0}), USD)
        assert result.currency == USD
        assert result.amount == pytest.approx(120.0)

    def test_usd_eur_quote(self) -> None:
        m = UncheckedFxMatrix()
        m.add_currency(USD, EUR, 1.1)
        result = convert(m, MultipleCurrencyAmount.of({EUR: 100.0}), USD)
        assert result.amount == pytest.approx(110.0)

    def test_mixed_bag(self, matrix: UncheckedFxMatrix) -> None:
        result = convert(matrix, MultipleCurrencyAmount.of({USD: 10.0, EUR: 100.0}), USD)
        assert result.amount == pytest.approx(130.0)

    def test_reverse_direction(self, matrix: UncheckedFxMatrix) -> None:
        result = convert(matrix, [CurrencyAmount.of(USD, 120.0)], EUR)
        assert result.currency == EUR
        assert result.amount == pytest.approx(100.0)

    def test_same_currency_is_identity(self) -> None:
        result = convert(UncheckedFxMatrix(), [CurrencyAmount.of(GBP, 7.5)], GBP)
        assert result.amount == 7.5

    def test_empty_bag_is_zero(self, matrix: UncheckedFxMatrix) -> None:
        result = convert(matrix, MultipleCurrencyAmount(), CHF)
        assert result == CurrencyAmount.of(CHF, 0.0)

    def test_unknown_currency_aborts(self, matrix: UncheckedFxMatrix) -> None:
        with pytest.raises(UnknownCurrency):
            convert(matrix, MultipleCurrencyAmount.of({EUR: 1.0, GBP: 1.0}), USD)

    def test_missing_rate_aborts(self, matrix: UncheckedFxMatrix) -> None:
        matrix.add_currency(GBP, USD, 0.75)
        with pytest.raises(NoRateAvailable):
            convert(matrix, MultipleCurrencyAmount.of({EUR: 1.0}), GBP)

    def test_non_currency_target_rejected(self) -> None:
        m = UncheckedFxMatrix()
        m.add_currency("EUR", "USD", 0.8)
        with pytest.raises(InvalidArgument, match="must be a Currency"):
            convert(m, [], "USD")
        assert m.get_fx_rate("EUR", "USD") == 0.8

    def test_none_arguments(self, matrix: UncheckedFxMatrix) -> None:
        with pytest.raises(InvalidArgument):
            convert(matrix, None, USD)
        with pytest.raises(InvalidArgument):
            convert(matrix, MultipleCurrencyAmount(), None)
