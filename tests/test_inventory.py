import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import logging
from decimal import Decimal
import pytest
from checkout.cart import Cart
from checkout.config import Limits
from checkout.coupons import PercentCoupon
from checkout.errors import (
    DuplicateCouponError,
    DuplicateNameError,
    InvalidNameError,
    InvalidPriceError,
    InvalidPromotionError,
    PricingError,
    UnknownCouponTypeError,
    UnknownPromotionTypeError,
)
from checkout.inventory import Inventory
from checkout.promotions import GetOneFree, NoPromotion


@pytest.fixture
def inventory():
    inv = Inventory()
    inv.register("Shampoo", "10.00", {"kind": "get_one_free", "nth": 3})
    inv.register_coupon("SPRING", {"kind": "percent", "percent": 10})
    return inv


def test_register_stores_product_with_promotion(inventory):
    entry = inventory.products["Shampoo"]
    assert isinstance(entry, GetOneFree)
    assert entry.product.name == "Shampoo"
    assert entry.product.price == Decimal("10.00")
    assert inventory.has_product("Shampoo")
    assert not inventory.has_product("Soap")


def test_register_without_promotion():
    inv = Inventory()
    entry = inv.register("Milk", Decimal("2.5"))
    assert isinstance(entry, NoPromotion)


def test_register_rounds_price_to_cents():
    """Цена хранится округлённой до копеек"""
    inv = Inventory()
    assert inv.register("Tea", "1.005").product.price == Decimal("1.01")
    assert inv.register("Gum", 0.1).product.price == Decimal("0.10")


def test_duplicate_name_fails_regardless_of_params(inventory):
    """Повторная регистрация всегда падает, даже с другими параметрами"""
    with pytest.raises(DuplicateNameError):
        inventory.register("Shampoo", "10.00", {"kind": "get_one_free", "nth": 3})
    with pytest.raises(DuplicateNameError):
        inventory.register("Shampoo", "5", {"kind": "package", "size": 2, "percent": 5})
    with pytest.raises(DuplicateNameError):
        inventory.register("Shampoo", "-1")


def test_name_length_limit():
    inv = Inventory()
    inv.register("x" * 40, "1")
    with pytest.raises(InvalidNameError):
        inv.register("y" * 41, "1")


@pytest.mark.parametrize("price", ["0", "0.004", "-3", "1000", "999.995", "abc", None])
def test_invalid_prices(price):
    """Округлённая цена должна лежать в (0, 1000)"""
    with pytest.raises(InvalidPriceError):
        Inventory().register("Soap", price)


@pytest.mark.parametrize("price", ["0.005", "0.01", "999.99", "999.994"])
def test_boundary_prices_accepted(price):
    assert Inventory().register("Soap", price).product.price > 0


def test_failed_register_leaves_inventory_unchanged():
    """При ошибке реестр не меняется"""
    inv = Inventory()
    with pytest.raises(UnknownPromotionTypeError):
        inv.register("Soap", "3", {"kind": "mystery"})
    with pytest.raises(InvalidPromotionError):
        inv.register("Soap", "3", {"kind": "package", "size": 0, "percent": 5})
    assert inv.products == {}

    inv.register("Soap", "3")
    assert list(inv.products) == ["Soap"]


def test_check_order_duplicate_before_name_and_price(inventory):
    """Сначала проверяется дубликат, затем имя, затем цена"""
    inventory.register("z" * 40, "1")
    with pytest.raises(DuplicateNameError):
        inventory.register("z" * 40, "0")
    with pytest.raises(InvalidNameError):
        inventory.register("q" * 41, "0")


def test_register_coupon(inventory):
    assert inventory.find_coupon("SPRING") == PercentCoupon("SPRING", Decimal("10"))
    assert inventory.has_coupon("SPRING")
    assert inventory.find_coupon("WINTER") is None


def test_register_coupon_errors(inventory):
    with pytest.raises(DuplicateCouponError):
        inventory.register_coupon("SPRING", {"kind": "amount", "amount": 5})
    with pytest.raises(UnknownCouponTypeError):
        inventory.register_coupon("GIFT", {"kind": "gift"})
    assert not inventory.has_coupon("GIFT")


def test_errors_share_base_class():
    """Все ошибки магазина ловятся через PricingError и через ValueError"""
    with pytest.raises(PricingError):
        Inventory().register("a" * 41, "1")
    with pytest.raises(ValueError):
        Inventory().register("Soap", "0")


def test_custom_limits():
    inv = Inventory(Limits(max_name_length=5, max_price=Decimal("10")))
    inv.register("Soap", "9.99")
    with pytest.raises(InvalidNameError):
        inv.register("Shampoo", "1")
    with pytest.raises(InvalidPriceError):
        inv.register("Gel", "10")


def test_new_cart_is_bound(inventory):
    cart = inventory.new_cart()
    assert isinstance(cart, Cart)
    assert cart.inventory is inventory
    assert inventory.new_cart() is not cart


def test_registration_is_logged(caplog):
    inv = Inventory()
    with caplog.at_level(logging.INFO, logger="checkout.inventory"):
        inv.register("Soap", "3")
        with pytest.raises(InvalidPriceError):
            inv.register("Gel", "0")

    assert [r.levelname for r in caplog.records] == ["INFO", "WARNING"]
    assert caplog.records[0].product == "Soap"
    assert caplog.records[1].product == "Gel"


def test_register_with_camel_case_promotions():
    """Регистрация всех видов акций в написании buyNGetOneFree / percentOff"""
    inv = Inventory()
    inv.register("Shampoo", "10.00", {"kind": "buyNGetOneFree", "nth": 3})
    inv.register("Tea", "10.00", {"kind": "package", "size": 3, "percentOff": 20})
    inv.register("Coffee", "10.00", {"kind": "threshold", "threshold": 2, "percentOff": 50})

    assert inv.products["Shampoo"].promoted_price(3) == Decimal("20.00")
    assert inv.products["Tea"].promoted_price(4) == Decimal("34.00")
    assert inv.products["Coffee"].promoted_price(5) == Decimal("35.00")
