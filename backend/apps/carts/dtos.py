from dataclasses import dataclass, field
from decimal import Decimal
from typing import List

from apps.catalog.dtos import Catalog


@dataclass
class CartLineDTO:
    # Weak reference: the product may have been deleted since
    id: str
    title: str
    price: Decimal
    qty: int

    @property
    def subtotal(self) -> Decimal:
        return self.price * self.qty


@dataclass
class CartDTO:
    lines: List[CartLineDTO]
    total: Decimal
    count: int


@dataclass
class CheckoutResult:
    catalog: Catalog
    cart: List[CartLineDTO]
    total: Decimal
    purchased: List[CartLineDTO] = field(default_factory=list)
