import unittest
from decimal import Decimal

from apps.catalog.cache import ProductListCache
from apps.catalog.dtos import ProductDTO


class FakeCacheBackend:
    def __init__(self):
        self.store = {}
        self.timeouts = {}

    def get(self, key, default=None):
        return self.store.get(key, default)

    def set(self, key, value, timeout=None):
        self.store[key] = value
        self.timeouts[key] = timeout


def make_products():
    return [ProductDTO(id="p1", title="Trekking Poles", price=Decimal("19.99"), qty=10)]


class ProductListCacheTests(unittest.TestCase):
    def test_round_trip_by_search_term(self):
        cache = ProductListCache(FakeCacheBackend())
        cache.set("Poles", make_products())
        self.assertEqual(cache.get(" poles ")[0].id, "p1")
        self.assertIsNone(cache.get(None))

    def test_invalidate_hides_previous_listings(self):
        backend = FakeCacheBackend()
        cache = ProductListCache(backend)
        cache.set(None, make_products())
        self.assertEqual(cache.invalidate(), 2)
        self.assertIsNone(cache.get(None))
        self.assertIsNone(backend.timeouts["products:list:version"])

    def test_disabled_cache_never_stores(self):
        backend = FakeCacheBackend()
        cache = ProductListCache(backend, enabled=False)
        cache.set(None, make_products())
        self.assertEqual(backend.store, {})
        self.assertIsNone(cache.get(None))
