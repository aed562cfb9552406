"""
Conversion — конвертация набора сумм в одну валюту

Чистая функция поверх любого FxRateLookup:
    result = Σ amount_i * get_fx_rate(target, currency_i)

Первая неразрешимая пара прерывает конвертацию, частичная сумма не
возвращается.
"""

from collections.abc import Iterable
from typing import Union

from fxmatrix.core.domain.amounts import CurrencyAmount, MultipleCurrencyAmount
from fxmatrix.core.domain.currency import Currency
from fxmatrix.core.errors import InvalidArgument
from fxmatrix.matrix.protocols import FxRateLookup


def convert(
    lookup: FxRateLookup,
    amount: Union[MultipleCurrencyAmount, Iterable[CurrencyAmount]],
    currency: Currency,
) -> CurrencyAmount:
    """
    Конвертация набора сумм в валюту currency.

    Args:
        lookup: Источник курсов (любая FX-матрица)
        amount: MultipleCurrencyAmount или iterable CurrencyAmount
        currency: Целевая валюта

    Returns:
        CurrencyAmount в целевой валюте (0.0 для пустого набора)

    Raises:
        InvalidArgument: Если amount или currency is None, или currency не Currency
        UnknownCurrency / NoRateAvailable: Если курс для какой-либо
            валюты набора не может быть получен
    """
    if amount is None:
        raise InvalidArgument("amount must not be None")
    if currency is None:
        raise InvalidArgument("currency must not be None")
    if not isinstance(currency, Currency):
        raise InvalidArgument(f"Conversion target must be a Currency, got {currency!r}")

    if isinstance(amount, MultipleCurrencyAmount):
        items: Iterable[CurrencyAmount] = amount.currency_amounts
    else:
        items = amount

    total = 0.0
    for ca in items:
        total += ca.amount * lookup.get_fx_rate(currency, ca.currency)
    return CurrencyAmount.of(currency, total)
