# Иерархия ошибок ценообразования.
# Все ошибки бросаются сразу в точке нарушения и не перехватываются внутри библиотеки.


class PricingError(Exception):
    """Базовая ошибка магазина"""


# ============ Регистрация товаров ============


class DuplicateNameError(PricingError, ValueError):
    pass


class InvalidNameError(PricingError, ValueError):
    pass


class InvalidPriceError(PricingError, ValueError):
    pass


class UnknownPromotionTypeError(PricingError, ValueError):
    pass


class InvalidPromotionError(PricingError, ValueError):
    pass


# ============ Регистрация купонов ============


class DuplicateCouponError(PricingError, ValueError):
    pass


class UnknownCouponTypeError(PricingError, ValueError):
    pass


class InvalidCouponError(PricingError, ValueError):
    pass


# ============ Корзина ============


class UndefinedProductError(PricingError, LookupError):
    pass


class TooManyUnitsError(PricingError, ValueError):
    pass


class InvalidCountError(PricingError, ValueError):
    pass


class CouponAlreadyUsedError(PricingError, RuntimeError):
    pass
