"""Конфигурация проверки согласованности курсов для CheckedFxMatrix.

Новый курс сравнивается с уже выводимым курсом пары после усечения обоих
до фиксированного числа знаков после запятой. Число знаков зависит от того,
является ли denominator пары "JPY-подобной" валютой.

Пресеты:
- legacy(): 2 знака для всех пар. Исторически политика описывалась как
  "2 знака для JPY, 4 для остальных", но фактически обе ветки сравнивали
  rate * 100. Это поведение по умолчанию, низкая точность намеренная.
- strict(): 4 знака для не-JPY, 2 знака для JPY.
"""

from dataclasses import dataclass, field
from collections.abc import Hashable

from fxmatrix.core.domain.currency import JPY


@dataclass(frozen=True)
class ConsistencyConfig:
    """Толерантность сравнения курсов.

    Attributes:
        default_decimals: знаков после запятой для обычных пар
        jpy_decimals: знаков после запятой, если denominator в jpy_currencies
        jpy_currencies: валюты с "крупной" котировкой (по умолчанию только JPY)
    """
    default_decimals: int = 2
    jpy_decimals: int = 2
    jpy_currencies: frozenset = field(default_factory=lambda: frozenset({JPY}))

    def __post_init__(self) -> None:
        if self.default_decimals < 0 or self.jpy_decimals < 0:
            raise ValueError(
                f"decimals must be non-negative, got default={self.default_decimals}, "
                f"jpy={self.jpy_decimals}"
            )

    @classmethod
    def legacy(cls) -> "ConsistencyConfig":
        return cls(default_decimals=2, jpy_decimals=2)

    @classmethod
    def strict(cls) -> "ConsistencyConfig":
        return cls(default_decimals=4, jpy_decimals=2)

    def decimals_for(self, denominator: Hashable) -> int:
        """Число знаков сравнения для пары с данным denominator."""
        if denominator in self.jpy_currencies:
            return self.jpy_decimals
        return self.default_decimals
