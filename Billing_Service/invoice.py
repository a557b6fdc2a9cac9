from dataclasses import dataclass
from decimal import Decimal
from functools import reduce
from typing import TYPE_CHECKING

from checkout.money import format_discount, format_money

if TYPE_CHECKING:
    from checkout.cart import Cart, CartItem


# ============ Текстовый счёт фиксированной ширины ============

NAME_WIDTH = 40
QTY_WIDTH = 4
PRICE_WIDTH = 8
MESSAGE_WIDTH = 44

DELIMITER = "+" + "-" * 48 + "+" + "-" * 10 + "+\n"


def invoice_row(name, count, price, message: str = "", discount: str = "") -> str:
    """
    Строка товара (и, если есть сообщение об акции, строка со скидкой под ней):
    | Shampoo                                       3 |    30.00 |
    |   (buy 2, get 1 free)                          |   -10.00 |
    """
    row = (
        f"| {str(name).ljust(NAME_WIDTH)}  {str(count).rjust(QTY_WIDTH)} "
        f"| {str(price).rjust(PRICE_WIDTH)} |\n"
    )
    if message:
        row += (
            f"|   {str(message).ljust(MESSAGE_WIDTH)} "
            f"| {str(discount).rjust(PRICE_WIDTH)} |\n"
        )
    return row


def item_rows(item: "CartItem") -> str:
    return invoice_row(
        item.name,
        item.count,
        format_money(item.price),
        item.message,
        format_discount(item.discount),
    )


def render_invoice(cart: "Cart") -> str:
    """Счёт по корзине; корзина не меняется, округление только здесь"""
    header = invoice_row("Name", "qty", "price")
    products = "".join(map(item_rows, cart.items.values()))

    coupon = ""
    if cart.coupon is not None:
        coupon = invoice_row(
            cart.coupon.message(), "", format_discount(cart.coupon_discount())
        )

    total = invoice_row("TOTAL", "", format_money(cart.total()))
    return DELIMITER + header + DELIMITER + products + coupon + DELIMITER + total + DELIMITER


@dataclass(frozen=True)
class Invoice:
    """Представление корзины в виде счёта (своего состояния нет)"""

    cart: "Cart"

    def __str__(self) -> str:
        return render_invoice(self.cart)


# ============ Сводка ============


def invoice_summary(cart: "Cart") -> dict:
    """Сводка по корзине (точные Decimal, без округления)"""
    items = tuple(cart.items.values())
    zero = Decimal("0")

    subtotal = reduce(lambda acc, i: acc + i.price, items, zero)
    promotions = reduce(lambda acc, i: acc + i.discount, items, zero)

    return {
        "items": len(items),
        "units": reduce(lambda acc, i: acc + i.count, items, 0),
        "subtotal": subtotal,
        "promotions": promotions,
        "products_total": cart.products_total(),
        "coupon_discount": cart.coupon_discount(),
        "total": cart.total(),
    }
