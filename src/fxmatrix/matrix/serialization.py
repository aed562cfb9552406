"""
Serialization — FX-матрицы в JSON-совместимые dict и обратно

Формат payload (контракт fx_matrix.json):
    {
        "schema_version": "1",
        "kind": "unchecked" | "checked" | "immutable" | "immutable_checked",
        "currencies": ["USD", "EUR", ...],          # порядок индексов
        "rates": [[cell(0,1), cell(0,2), ...], ...],  # -1 для незаданных
        "supplied": [[true, false, ...], ...],       # только checked
        "consistency": {...}                         # только checked, опционально
    }

Порядок валют сохраняется, поэтому восстановленная матрица равна исходной.
Снапшоты восстанавливаются повторной материализацией.
"""

import logging
from typing import Any, Dict, Union

from fxmatrix.core.contracts import validate_fx_matrix
from fxmatrix.core.domain.currency import Currency
from fxmatrix.core.errors import InvalidArgument
from fxmatrix.matrix.checked import CheckedFxMatrix
from fxmatrix.matrix.config import ConsistencyConfig
from fxmatrix.matrix.immutable import ImmutableCheckedFxMatrix, ImmutableFxMatrix
from fxmatrix.matrix.unchecked import UncheckedFxMatrix

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1"

AnyFxMatrix = Union[UncheckedFxMatrix, CheckedFxMatrix, ImmutableFxMatrix, ImmutableCheckedFxMatrix]

_KINDS = {
    UncheckedFxMatrix: "unchecked",
    CheckedFxMatrix: "checked",
    ImmutableFxMatrix: "immutable",
    ImmutableCheckedFxMatrix: "immutable_checked",
}


def to_payload(matrix: AnyFxMatrix) -> Dict[str, Any]:
    """
    Сериализация матрицы в dict, проходящий validate_fx_matrix.

    Raises:
        InvalidArgument: Неизвестный тип матрицы или валюта не Currency
    """
    kind = _KINDS.get(type(matrix))
    if kind is None:
        raise InvalidArgument(f"Cannot serialize {type(matrix).__name__}")

    payload: Dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "kind": kind,
        "currencies": [_code(ccy) for ccy in matrix.currencies],
        "rates": matrix.fx_rates,
    }
    if isinstance(matrix, CheckedFxMatrix):
        payload["supplied"] = matrix.supplied_flags
        payload["consistency"] = {
            "default_decimals": matrix.config.default_decimals,
            "jpy_decimals": matrix.config.jpy_decimals,
            "jpy_currencies": sorted(_code(ccy) for ccy in matrix.config.jpy_currencies),
        }
    return payload


def from_payload(data: Dict[str, Any]) -> AnyFxMatrix:
    """
    Восстановление матрицы из payload.

    Raises:
        jsonschema.ValidationError: payload не соответствует контракту
        InvalidArgument: Форма строк не соответствует числу валют
    """
    validate_fx_matrix(data)
    kind = data["kind"]
    currencies = [Currency.of(code) for code in data["currencies"]]
    rates = data["rates"]
    logger.debug("restoring %s matrix with %d currencies", kind, len(currencies))

    if kind == "checked":
        return CheckedFxMatrix.from_table(
            currencies, rates, data["supplied"], _config(data.get("consistency"))
        )
    store = UncheckedFxMatrix.from_table(currencies, rates)
    if kind == "unchecked":
        return store
    if kind == "immutable":
        return ImmutableFxMatrix.of(store)
    return ImmutableCheckedFxMatrix.of(store)


def _config(data: Dict[str, Any] | None) -> ConsistencyConfig | None:
    if data is None:
        return None
    if "jpy_currencies" not in data:
        return ConsistencyConfig(
            default_decimals=data["default_decimals"],
            jpy_decimals=data["jpy_decimals"],
        )
    return ConsistencyConfig(
        default_decimals=data["default_decimals"],
        jpy_decimals=data["jpy_decimals"],
        jpy_currencies=frozenset(Currency.of(code) for code in data["jpy_currencies"]),
    )


def _code(currency: object) -> str:
    if not isinstance(currency, Currency):
        raise InvalidArgument(f"Only Currency values can be serialized, got {currency!r}")
    return currency.code
