from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Optional


@dataclass
class ProductDTO:
    id: str
    title: str
    price: Decimal
    qty: int
    img: Optional[str] = None
    color: Optional[str] = None


# Keyed by product id; dict insertion order is the display order.
Catalog = Dict[str, ProductDTO]
