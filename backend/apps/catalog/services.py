from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from django.db import transaction

from apps.common import get_logger
from apps.common.errors import UnauthorizedError

from .cache import ProductListCache
from .commands import ProductUpsertCommand
from .dtos import ProductDTO
from .inventory import (
    ColorFactory,
    IdFactory,
    build_catalog,
    delete_product,
    reset_catalog,
    search_products,
    upsert_product,
)
from .protocols import CatalogStoreProtocol

logger = get_logger(__name__).bind(component="catalog", layer="service")

AuthCheck = Callable[[], bool]


class CatalogService:
    def __init__(
        self,
        products: CatalogStoreProtocol,
        listing_cache: ProductListCache,
        id_factory: IdFactory,
        color_factory: ColorFactory,
    ):
        self.products = products
        self.listing_cache = listing_cache
        self.id_factory = id_factory
        self.color_factory = color_factory
        self.logger = logger.bind(service="CatalogService")

    def list_products(self, search: Optional[str] = None) -> List[ProductDTO]:
        cached = self.listing_cache.get(search)
        if cached is not None:
            self.logger.debug("Product list cache hit", search=search)
            return cached
        self.logger.debug("Product list cache miss", search=search)
        data = search_products(build_catalog(self.products.load()), search)
        self.listing_cache.set(search, data)
        return data

    def get_product(self, product_id: str) -> Optional[ProductDTO]:
        self.logger.debug("Fetching product", product_id=product_id)
        product = self.products.find(product_id)
        if not product:
            self.logger.info("Product not found", product_id=product_id)
        return product

    def upsert_product(
        self,
        data: Union[Dict[str, Any], ProductUpsertCommand],
        *,
        is_authorized: AuthCheck,
    ) -> Tuple[ProductDTO, bool]:
        self._require_admin(is_authorized, "upsert")
        cmd = (
            data
            if isinstance(data, ProductUpsertCommand)
            else ProductUpsertCommand.from_raw(data)
        )
        self.logger.info("Upserting product", title=cmd.title)
        with transaction.atomic():
            catalog = build_catalog(self.products.load(for_update=True))
            product, created = upsert_product(
                catalog,
                cmd,
                id_factory=self.id_factory,
                color_factory=self.color_factory,
            )
            self.products.save(catalog.values())
        self.listing_cache.invalidate()
        self.logger.info(
            "Product added" if created else "Product updated",
            product_id=product.id,
            qty=product.qty,
        )
        return product, created

    def delete_product(self, product_id: str, *, is_authorized: AuthCheck) -> ProductDTO:
        """Remove a product. Cart lines pointing at it are left as orphans."""
        self._require_admin(is_authorized, "delete")
        self.logger.info("Deleting product", product_id=product_id)
        with transaction.atomic():
            catalog = build_catalog(self.products.load(for_update=True))
            removed = delete_product(catalog, product_id)
            self.products.save(catalog.values())
        self.listing_cache.invalidate()
        self.logger.info("Product deleted", product_id=product_id)
        return removed

    def reset_catalog(self, *, is_authorized: AuthCheck) -> List[ProductDTO]:
        self._require_admin(is_authorized, "reset")
        self.logger.info("Resetting catalog to default products")
        catalog = reset_catalog()
        with transaction.atomic():
            self.products.load(for_update=True)
            self.products.save(catalog.values())
        self.listing_cache.invalidate()
        return list(catalog.values())

    def _require_admin(self, is_authorized: AuthCheck, operation: str) -> None:
        if not is_authorized():
            self.logger.warning("Catalog change rejected: not an admin", operation=operation)
            raise UnauthorizedError()
