from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from django.db import transaction

from apps.catalog.cache import ProductListCache
from apps.catalog.inventory import build_catalog
from apps.catalog.protocols import CatalogStoreProtocol
from apps.common import get_logger
from apps.common.errors import (
    EmptyCartError,
    InsufficientStockError,
    OutOfStockError,
    PersistenceError,
)

from .dtos import CartDTO, CheckoutResult
from .engine import CartEngine, checkout
from .protocols import CartStoreProtocol

logger = get_logger(__name__).bind(component="carts", layer="service")


class CartService:
    def __init__(
        self,
        carts: CartStoreProtocol,
        products: CatalogStoreProtocol,
        listing_cache: ProductListCache,
    ):
        self.carts = carts
        self.products = products
        self.listing_cache = listing_cache
        self.logger = logger.bind(service="CartService")

    def open_session(self, owner_id: int) -> CartEngine:
        """Build an engine from this owner's own saved cart."""
        return CartEngine(self.carts.load(owner_id))

    @contextmanager
    def locked_session(self, owner_id: int) -> Iterator[CartEngine]:
        """Open the owner's cart for a read-modify-write under the owner lock.

        Concurrent requests of the same owner, checkout included, queue on the
        lock, so none of them saves over a cart it did not read.
        """
        with transaction.atomic():
            self.carts.lock(owner_id)
            yield self.open_session(owner_id)

    def get_cart(self, owner_id: int) -> CartDTO:
        self.logger.debug("Fetching cart", owner_id=owner_id)
        return self.open_session(owner_id).snapshot()

    def add_item(self, owner_id: int, product_id: str) -> CartDTO:
        with self.locked_session(owner_id) as session:
            product = self.products.find(product_id)
            catalog = {product.id: product} if product else {}
            try:
                line = session.add_to_cart(catalog, product_id)
            except OutOfStockError:
                self.logger.warning(
                    "Add to cart rejected: out of stock",
                    owner_id=owner_id,
                    product_id=product_id,
                    known_product=product is not None,
                )
                raise
            self.logger.info(
                "Added to cart", owner_id=owner_id, product_id=product_id, qty=line.qty
            )
            return self._persist(owner_id, session, "add_item")

    def change_quantity(self, owner_id: int, index: int, delta: int) -> CartDTO:
        with self.locked_session(owner_id) as session:
            if not session.change_quantity(index, delta):
                self.logger.debug("Stale cart index ignored", owner_id=owner_id, index=index)
                return session.snapshot()
            self.logger.info(
                "Cart quantity changed", owner_id=owner_id, index=index, delta=delta
            )
            return self._persist(owner_id, session, "change_quantity")

    def remove_line(self, owner_id: int, index: int) -> CartDTO:
        with self.locked_session(owner_id) as session:
            if not session.remove_line(index):
                self.logger.debug("Stale cart index ignored", owner_id=owner_id, index=index)
                return session.snapshot()
            self.logger.info("Cart line removed", owner_id=owner_id, index=index)
            return self._persist(owner_id, session, "remove_line")

    def empty_cart(self, owner_id: int) -> CartDTO:
        with self.locked_session(owner_id) as session:
            session.empty()
            self.logger.info("Cart emptied", owner_id=owner_id)
            return self._persist(owner_id, session, "empty_cart")

    def checkout(self, owner_id: int) -> CheckoutResult:
        """Validate against freshly locked stock, then deduct and clear, atomically.

        The catalog and then the owner are locked before the cart is read, so
        neither a second checkout nor a concurrent cart edit of the same owner
        can act on the uncleared cart.
        """
        self.logger.info("Checkout started", owner_id=owner_id)
        with transaction.atomic():
            catalog = build_catalog(self.products.load(for_update=True))
            self.carts.lock(owner_id)
            lines = self.carts.load(owner_id)
            try:
                result = checkout(lines, catalog)
            except EmptyCartError:
                self.logger.warning("Checkout rejected: cart empty", owner_id=owner_id)
                raise
            except InsufficientStockError as exc:
                self.logger.warning(
                    "Checkout rejected: insufficient stock",
                    owner_id=owner_id,
                    product_id=exc.product_id,
                    requested=exc.requested,
                    available=exc.available,
                )
                raise
            self.products.save(result.catalog.values())
            self.carts.save(owner_id, result.cart)
        self.listing_cache.invalidate()
        self.logger.info(
            "Checkout completed",
            owner_id=owner_id,
            lines=len(result.purchased),
            total=result.total,
        )
        return result

    def _persist(self, owner_id: int, session: CartEngine, operation: str) -> CartDTO:
        try:
            self.carts.save(owner_id, session.lines)
        except PersistenceError as exc:
            self.logger.warning(
                "Cart save failed; in-memory cart kept",
                owner_id=owner_id,
                operation=operation,
            )
            exc.pending = session.snapshot()
            raise
        return session.snapshot()
