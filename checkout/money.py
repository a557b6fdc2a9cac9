from decimal import Decimal, ROUND_HALF_UP
from typing import Union

# Денежные значения: точная десятичная арифметика, округление только при выводе

CENT = Decimal("0.01")

Number = Union[str, int, float, Decimal]


def to_decimal(value: Number) -> Decimal:
    """
    Приводит цену/процент к Decimal.
    float идёт через str(), чтобы 0.1 стал Decimal("0.1"), а не двоичным хвостом.
    Некорректная строка -> decimal.InvalidOperation
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        return Decimal(value.strip())
    return Decimal(value)


def round_money(value: Decimal) -> Decimal:
    """Округление до копеек (half-up)"""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def format_money(value: Decimal) -> str:
    """Ровно два знака после точки: 34 -> '34.00'"""
    return str(round_money(value))


def format_discount(value: Decimal) -> str:
    """Скидка в счёте показывается со знаком минус, даже нулевая: '-0.00'"""
    return "-" + format_money(value)


def format_percent(value: Decimal) -> str:
    """Процент без лишних нулей: 20 -> '20', 12.50 -> '12.5'"""
    return format(value.normalize(), "f")
