from __future__ import annotations

import random

from django.conf import settings
from django.core.cache import cache

from .cache import ProductListCache
from .identifiers import ColorPicker, ProductIdFactory
from .repositories import ProductRepository
from .services import CatalogService


def _rng() -> random.Random:
    seed = getattr(settings, "GEARSTORE_RANDOM_SEED", None)
    return random.Random(seed) if seed is not None else random.Random()


def build_listing_cache(*, disable_cache: bool = False) -> ProductListCache:
    return ProductListCache(cache, enabled=not disable_cache)


def build_catalog_service(*, disable_cache: bool = False) -> CatalogService:
    return CatalogService(
        products=ProductRepository(),
        listing_cache=build_listing_cache(disable_cache=disable_cache),
        id_factory=ProductIdFactory(_rng()),
        color_factory=ColorPicker(_rng()),
    )
