"""
Errors — иерархия исключений fxmatrix

Все ошибки сообщаются синхронно вызывающему коду операции, которая их
обнаружила. Ядро не выполняет retry и не применяет изменения частично:
неудачный add_currency оставляет матрицу в исходном состоянии, неудачный
convert не возвращает частичную сумму.

Каждый тип дополнительно наследует ближайшее builtin-исключение, чтобы
вызывающий код мог ловить как FxMatrixError, так и ValueError/LookupError.
"""


class FxMatrixError(Exception):
    """Базовое исключение для всех ошибок fxmatrix."""
    pass


class InvalidArgument(FxMatrixError, ValueError):
    """
    Некорректный аргумент операции.

    Возникает при:
    - отсутствующей (None) валюте
    - курсе <= 0, NaN или Inf
    - numerator == denominator в мутирующем вызове
    """
    pass


class UnknownCurrency(FxMatrixError, LookupError):
    """Валюта из запроса никогда не добавлялась в матрицу."""

    def __init__(self, currency: object):
        self.currency = currency
        super().__init__(f"{currency} not found in FX matrix")


class AlreadyPresent(FxMatrixError):
    """
    add_currency для пары, у которой уже есть курс.

    Checked-матрица: курс был задан напрямую (supplied).
    Unchecked-матрица: любой курс (там нет различия supplied/implied).
    Для изменения существующего курса используйте update_rates.
    """

    def __init__(self, numerator: object, denominator: object):
        self.numerator = numerator
        self.denominator = denominator
        super().__init__(f"Already have a value for {numerator}/{denominator}")


class NoRateAvailable(FxMatrixError, LookupError):
    """Курс не может быть получен ни напрямую, ни через кросс-курсы."""

    def __init__(self, numerator: object, denominator: object, detail: str = ""):
        self.numerator = numerator
        self.denominator = denominator
        message = f"No FX rate available for {numerator}/{denominator}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class InconsistentRate(FxMatrixError, ValueError):
    """
    Новый курс расходится с уже выводимым курсом сверх толерантности.

    Только для Checked-матрицы.
    """

    def __init__(
        self,
        numerator: object,
        denominator: object,
        existing_rate: float,
        new_rate: float,
        decimals: int,
    ):
        self.numerator = numerator
        self.denominator = denominator
        self.existing_rate = existing_rate
        self.new_rate = new_rate
        self.decimals = decimals
        super().__init__(
            f"Implied FX rate for {numerator}/{denominator} {existing_rate} "
            f"was inconsistent with the provided rate {new_rate} "
            f"(compared to {decimals} d.p.)"
        )


class ImmutableViolation(FxMatrixError, TypeError):
    """Попытка мутации неизменяемого снапшота матрицы."""
    pass
