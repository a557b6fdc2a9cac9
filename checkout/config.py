from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Limits:
    """
    Ограничения магазина.
    Цена проверяется по открытому интервалу (min_price, max_price),
    количество в строке корзины - по отрезку [1, max_units].
    """

    max_name_length: int = 40
    min_price: Decimal = Decimal("0")
    max_price: Decimal = Decimal("1000")
    max_units: int = 99

    def price_allowed(self, price: Decimal) -> bool:
        return self.min_price < price < self.max_price


DEFAULT_LIMITS = Limits()
