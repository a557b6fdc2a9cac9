import logging
from decimal import Decimal
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, Mapping, Optional

from Billing_Service.invoice import render_invoice

from .config import Limits
from .coupons import Coupon
from .errors import (
    CouponAlreadyUsedError,
    InvalidCountError,
    TooManyUnitsError,
    UndefinedProductError,
)
from .promotions import ZERO, Promotion

if TYPE_CHECKING:
    from .inventory import Inventory

logger = logging.getLogger(__name__)


class CartItem:
    """Строка корзины: ссылка на запись инвентаря + количество"""

    def __init__(self, entry: Promotion, max_units: int = 99):
        self.entry = entry
        self.count = 0
        self._max_units = max_units

    def checked_count(self, more: int) -> int:
        """Новое количество после add(more), без изменения строки"""
        if isinstance(more, bool) or not isinstance(more, int):
            raise InvalidCountError(
                f"Quantity of '{self.name}' must be an integer, got {more!r}"
            )
        new_count = self.count + more
        if new_count > self._max_units:
            raise TooManyUnitsError(
                f"Too many units of '{self.name}': {new_count} > {self._max_units}"
            )
        if new_count <= 0:
            raise InvalidCountError(f"Invalid count of '{self.name}': {new_count}")
        return new_count

    def add(self, more: int) -> int:
        # отрицательное more уменьшает количество, но не ниже 1
        self.count = self.checked_count(more)
        return self.count

    @property
    def name(self) -> str:
        return self.entry.product.name

    @property
    def price(self) -> Decimal:
        return self.entry.product.counted_price(self.count)

    @property
    def promoted_price(self) -> Decimal:
        return self.entry.promoted_price(self.count)

    @property
    def discount(self) -> Decimal:
        return self.entry.discount(self.count)

    @property
    def message(self) -> str:
        return self.entry.message()

    def __repr__(self) -> str:
        return f"CartItem({self.name!r}, count={self.count})"


class Cart:
    """
    Корзина над одним инвентарём.
    Строки хранятся в порядке первого добавления (этот же порядок в счёте),
    купон можно применить один раз.
    """

    def __init__(self, inventory: "Inventory"):
        self.inventory = inventory
        self._items: Dict[str, CartItem] = {}
        self._coupon: Optional[Coupon] = None

    @property
    def limits(self) -> Limits:
        return self.inventory.limits

    @property
    def items(self) -> Mapping[str, CartItem]:
        return MappingProxyType(self._items)

    @property
    def coupon(self) -> Optional[Coupon]:
        return self._coupon

    # ============ Изменение корзины ============

    def add(self, name: str, quantity: int = 1) -> CartItem:
        if not self.inventory.has_product(name):
            raise UndefinedProductError(f"Undefined product: '{name}'")

        item = self._items.get(name)
        if item is None:
            item = CartItem(self.inventory.products[name], self.limits.max_units)
            item.checked_count(quantity)
            self._items[name] = item
        item.add(quantity)

        logger.debug(
            "cart updated", extra={"product": name, "quantity": item.count}
        )
        return item

    def remove(self, name: str, quantity: int = 1) -> CartItem:
        """То же, что add(name, -quantity): строку нельзя довести до нуля"""
        return self.add(name, -quantity)

    def use(self, coupon_name: str) -> Optional[Coupon]:
        if self._coupon is not None:
            raise CouponAlreadyUsedError(
                f"A coupon is already used: '{self._coupon.name}'"
            )

        self._coupon = self.inventory.find_coupon(coupon_name)
        if self._coupon is None:
            logger.warning(
                "unknown coupon ignored", extra={"coupon": coupon_name}
            )
        return self._coupon

    # ============ Суммы (точные, без округления) ============

    def products_total(self) -> Decimal:
        return sum((item.promoted_price for item in self._items.values()), ZERO)

    def coupon_discount(self) -> Decimal:
        if self._coupon is None:
            return ZERO
        return self._coupon.discount(self.products_total())

    def total(self) -> Decimal:
        return self.products_total() - self.coupon_discount()

    def invoice(self) -> str:
        return render_invoice(self)
