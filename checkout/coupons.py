from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Mapping, Union

from .errors import InvalidCouponError, UnknownCouponTypeError
from .money import format_money, format_percent, to_decimal

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class PercentCoupon:
    name: str
    percent: Decimal

    def discount(self, amount_from: Decimal) -> Decimal:
        return amount_from * (self.percent / HUNDRED)

    def message(self) -> str:
        return f"Coupon {self.name} - {format_percent(self.percent)}% off"


@dataclass(frozen=True)
class AmountCoupon:
    name: str
    amount: Decimal

    def discount(self, amount_from: Decimal) -> Decimal:
        """Не больше самой суммы: купон на 100 при корзине в 40 даёт 40"""
        return min(self.amount, amount_from)

    def message(self) -> str:
        return f"Coupon {self.name} - {format_money(self.amount)} off"


Coupon = Union[PercentCoupon, AmountCoupon]


def _decimal_param(params: Mapping, key: str) -> Decimal:
    value = params.get(key)
    try:
        result = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidCouponError(f"'{key}' is not a number: {value!r}") from None
    if not result.is_finite():
        raise InvalidCouponError(f"'{key}' is not a number: {value!r}")
    return result


def make_coupon(name: str, params: Mapping) -> Coupon:
    """
    {"kind": "percent", "percent": 10}  -> PercentCoupon
    {"kind": "amount", "amount": "5"}   -> AmountCoupon
    Всё остальное -> UnknownCouponTypeError
    """
    kind = params.get("kind")
    if kind == "percent":
        percent = _decimal_param(params, "percent")
        if not Decimal("0") <= percent <= HUNDRED:
            raise InvalidCouponError(f"'percent' must be within 0..100, got {percent}")
        return PercentCoupon(name, percent)
    if kind == "amount":
        amount = _decimal_param(params, "amount")
        if amount < 0:
            raise InvalidCouponError(f"'amount' must not be negative, got {amount}")
        return AmountCoupon(name, amount)
    raise UnknownCouponTypeError(f"Unknown coupon type: {kind!r}")
