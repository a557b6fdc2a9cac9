from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Product:
    name: str
    price: Decimal  # уже округлена до копеек при регистрации

    def counted_price(self, count: int) -> Decimal:
        """Стоимость count единиц без скидок"""
        return self.price * count
