import logging
from decimal import Decimal, InvalidOperation
from threading import Lock
from typing import Dict, Mapping, Optional

from .cart import Cart
from .config import DEFAULT_LIMITS, Limits
from .coupons import Coupon, make_coupon
from .domain import Product
from .errors import (
    DuplicateCouponError,
    DuplicateNameError,
    InvalidNameError,
    InvalidPriceError,
    PricingError,
)
from .money import Number, round_money, to_decimal
from .promotions import Promotion, make_promotion

logger = logging.getLogger(__name__)


class Inventory:
    """
    Реестр товаров (имя -> Promotion) и купонов (имя -> Coupon).
    Только добавление: удаления и изменения нет.
    Запись сериализуется блокировкой, чтение идёт без неё.
    """

    def __init__(self, limits: Limits = DEFAULT_LIMITS):
        self.limits = limits
        self.products: Dict[str, Promotion] = {}
        self.coupons: Dict[str, Coupon] = {}
        self._lock = Lock()

    # ============ Поиск ============

    def has_product(self, name: str) -> bool:
        return name in self.products

    def has_coupon(self, name: str) -> bool:
        return name in self.coupons

    def find_coupon(self, name: str) -> Optional[Coupon]:
        return self.coupons.get(name)

    # ============ Регистрация ============

    def register(
        self, name: str, price: Number, promotion: Optional[Mapping] = None
    ) -> Promotion:
        """
        Регистрирует товар. Сначала полная проверка, потом запись:
        при ошибке реестр не меняется.
        """
        with self._lock:
            try:
                entry = self._build_entry(name, price, promotion)
            except PricingError as e:
                logger.warning(
                    "product rejected", extra={"product": name, "error": str(e)}
                )
                raise
            self.products[name] = entry

        logger.info("product registered", extra={"product": name})
        return entry

    def register_coupon(self, name: str, params: Mapping) -> Coupon:
        with self._lock:
            try:
                if self.has_coupon(name):
                    raise DuplicateCouponError(f"{name} coupon is in inventory")
                coupon = make_coupon(name, params)
            except PricingError as e:
                logger.warning(
                    "coupon rejected", extra={"coupon": name, "error": str(e)}
                )
                raise
            self.coupons[name] = coupon

        logger.info("coupon registered", extra={"coupon": name})
        return coupon

    def _build_entry(
        self, name: str, price: Number, promotion: Optional[Mapping]
    ) -> Promotion:
        if self.has_product(name):
            raise DuplicateNameError(f"'{name}' is in inventory")
        if len(name) > self.limits.max_name_length:
            raise InvalidNameError(
                f"Name longer than {self.limits.max_name_length} characters: {name!r}"
            )
        return make_promotion(Product(name, self._checked_price(price)), promotion)

    def _checked_price(self, price: Number) -> Decimal:
        try:
            value = to_decimal(price)
        except (InvalidOperation, TypeError, ValueError):
            raise InvalidPriceError(f"Invalid price: {price!r}") from None
        if not value.is_finite():
            raise InvalidPriceError(f"Invalid price: {price!r}")

        rounded = round_money(value)
        if not self.limits.price_allowed(rounded):
            raise InvalidPriceError(
                f"Price {rounded} is outside "
                f"({self.limits.min_price}, {self.limits.max_price})"
            )
        return rounded

    # ============ Корзины ============

    def new_cart(self) -> Cart:
        return Cart(self)
