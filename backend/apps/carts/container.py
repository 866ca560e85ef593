from __future__ import annotations

from apps.catalog.container import build_listing_cache
from apps.catalog.repositories import ProductRepository

from .repositories import CartLineRepository
from .services import CartService


def build_cart_service() -> CartService:
    return CartService(
        carts=CartLineRepository(),
        products=ProductRepository(),
        listing_cache=build_listing_cache(),
    )
