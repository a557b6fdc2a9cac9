from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Callable, ClassVar, Dict, Mapping, Optional

from .domain import Product
from .errors import InvalidPromotionError, UnknownPromotionTypeError
from .money import format_percent, to_decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")


# ============ Стратегии скидок на товар ============


@dataclass(frozen=True)
class Promotion(ABC):
    """
    Товар вместе с правилом скидки.
    promoted_price(count) = count * price - discount(count),
    причём 0 <= discount(count) <= count * price.
    """

    product: Product

    kind: ClassVar[str] = ""

    @abstractmethod
    def discount(self, count: int) -> Decimal:
        ...

    def promoted_price(self, count: int) -> Decimal:
        return self.product.counted_price(count) - self.discount(count)

    def message(self) -> str:
        """Описание акции для строки счёта (пустая строка - акции нет)"""
        return ""


@dataclass(frozen=True)
class NoPromotion(Promotion):
    kind: ClassVar[str] = "none"

    def discount(self, count: int) -> Decimal:
        return ZERO


@dataclass(frozen=True)
class GetOneFree(Promotion):
    """Каждая nth единица бесплатно"""

    nth: int = 1

    kind: ClassVar[str] = "get_one_free"

    def discount(self, count: int) -> Decimal:
        return self.product.price * (count // self.nth)

    def message(self) -> str:
        return f"(buy {self.nth - 1}, get 1 free)"


@dataclass(frozen=True)
class PackageDiscount(Promotion):
    """percent% скидки на каждый полный пакет из size единиц"""

    size: int = 1
    percent: Decimal = ZERO

    kind: ClassVar[str] = "package"

    def discount(self, count: int) -> Decimal:
        packaged = (count // self.size) * self.size
        return self.product.price * packaged * (self.percent / HUNDRED)

    def message(self) -> str:
        return f"(get {format_percent(self.percent)}% off for every {self.size})"


@dataclass(frozen=True)
class ThresholdDiscount(Promotion):
    """percent% скидки на каждую единицу после первых threshold"""

    threshold: int = 0
    percent: Decimal = ZERO

    kind: ClassVar[str] = "threshold"

    def discount(self, count: int) -> Decimal:
        if count <= self.threshold:
            return ZERO
        return self.product.price * (count - self.threshold) * (self.percent / HUNDRED)

    def message(self) -> str:
        return (
            f"({format_percent(self.percent)}% off of every after the "
            f"{ordinal(self.threshold)})"
        )


def ordinal(n: int) -> str:
    """1 -> '1st', 2 -> '2nd', 3 -> '3rd', иначе 'Nth'"""
    return {1: "1st", 2: "2nd", 3: "3rd"}.get(n, f"{n}th")


# ============ Фабрика по описанию {"kind": ..., **params} ============


def _int_param(spec: Mapping, key: str, minimum: int) -> int:
    value = spec.get(key)
    if value is None:
        raise InvalidPromotionError(f"'{spec.get('kind')}' promotion needs '{key}'")
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise InvalidPromotionError(
            f"'{key}' must be an integer >= {minimum}, got {value!r}"
        )
    return value


# процент можно передать под любым из этих имён
PERCENT_KEYS = ("percent", "percent_off", "percentOff")


def _percent_param(spec: Mapping) -> Decimal:
    key = next((k for k in PERCENT_KEYS if spec.get(k) is not None), PERCENT_KEYS[0])
    value = spec.get(key)
    if value is None:
        raise InvalidPromotionError(f"'{spec.get('kind')}' promotion needs '{key}'")
    try:
        percent = to_decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidPromotionError(f"'{key}' is not a number: {value!r}") from None
    if not percent.is_finite() or not ZERO <= percent <= HUNDRED:
        raise InvalidPromotionError(f"'{key}' must be within 0..100, got {value!r}")
    return percent


_BUILDERS: Dict[str, Callable[[Product, Mapping], Promotion]] = {
    NoPromotion.kind: lambda product, spec: NoPromotion(product),
    GetOneFree.kind: lambda product, spec: GetOneFree(
        product, nth=_int_param(spec, "nth", 1)
    ),
    PackageDiscount.kind: lambda product, spec: PackageDiscount(
        product, size=_int_param(spec, "size", 1), percent=_percent_param(spec)
    ),
    ThresholdDiscount.kind: lambda product, spec: ThresholdDiscount(
        product,
        threshold=_int_param(spec, "threshold", 0),
        percent=_percent_param(spec),
    ),
}

PROMOTION_KINDS = tuple(_BUILDERS)

# другие написания вида акции
KIND_ALIASES = {
    "buy_n_get_one_free": GetOneFree.kind,
    "buyNGetOneFree": GetOneFree.kind,
}


def make_promotion(product: Product, spec: Optional[Mapping] = None) -> Promotion:
    """
    Строит стратегию по описанию:
      None / {}                                       -> NoPromotion
      {"kind": "get_one_free", "nth": 3}              -> GetOneFree
        (или "buy_n_get_one_free" / "buyNGetOneFree")
      {"kind": "package", "size": 3, "percent": 20}   -> PackageDiscount
      {"kind": "threshold", "threshold": 2, "percent": 50} -> ThresholdDiscount
    Вместо "percent" принимаются "percent_off" и "percentOff".
    Неизвестный kind -> UnknownPromotionTypeError
    """
    spec = spec or {}
    kind = spec.get("kind", NoPromotion.kind)
    builder = _BUILDERS.get(KIND_ALIASES.get(kind, kind))
    if builder is None:
        raise UnknownPromotionTypeError(f"Unknown promotion type: {kind!r}")
    return builder(product, spec)
