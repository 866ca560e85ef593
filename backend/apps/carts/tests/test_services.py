import unittest
from dataclasses import replace
from decimal import Decimal
from unittest.mock import patch

from apps.carts.dtos import CartDTO, CartLineDTO
from apps.carts.services import CartService
from apps.catalog.tests.fakes import DummyAtomic, FakeListingCache, FakeProductStore
from apps.common.errors import (
    EmptyCartError,
    InsufficientStockError,
    OutOfStockError,
    PersistenceError,
)


class FakeCartStore:
    def __init__(self):
        self.carts = {}
        self.fail_save = False
        self.events = []

    def lock(self, owner_id):
        self.events.append(("lock_owner", owner_id))

    def load(self, owner_id):
        self.events.append(("load", owner_id))
        return [replace(line) for line in self.carts.get(owner_id, [])]

    def save(self, owner_id, lines):
        if self.fail_save:
            raise PersistenceError(operation="save")
        self.carts[owner_id] = [replace(line) for line in lines]


class RecordingAtomic(DummyAtomic):
    def __init__(self, events):
        self.events = events

    def __enter__(self):
        self.events.append(("begin", None))
        return self

    def __exit__(self, exc_type, exc, tb):
        self.events.append(("rollback" if exc_type else "commit", None))
        return False


class RecordingProductStore(FakeProductStore):
    def __init__(self, events, **kwargs):
        super().__init__(**kwargs)
        self.events = events

    def load(self, for_update=False):
        self.events.append(("lock_catalog" if for_update else "read_catalog", None))
        return super().load(for_update=for_update)


class CartServiceTests(unittest.TestCase):
    def setUp(self):
        self.carts = FakeCartStore()
        patcher = patch(
            "apps.carts.services.transaction.atomic", RecordingAtomic(self.carts.events)
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        self.products = RecordingProductStore(self.carts.events)
        self.cache = FakeListingCache()
        self.service = CartService(
            carts=self.carts, products=self.products, listing_cache=self.cache
        )

    def add(self, product_id, times=1, owner=1):
        dto = None
        for _ in range(times):
            dto = self.service.add_item(owner, product_id)
        return dto

    def test_add_item_persists_and_returns_cart(self):
        dto = self.add("p1", times=3)
        self.assertIsInstance(dto, CartDTO)
        self.assertEqual(dto.count, 3)
        self.assertEqual(dto.total, Decimal("59.97"))
        self.assertEqual(self.carts.carts[1][0].qty, 3)
        self.assertEqual(self.products.qty("p1"), 10)

    def test_add_item_out_of_stock(self):
        self.products.rows[2].qty = 0
        with self.assertRaises(OutOfStockError):
            self.service.add_item(1, "p3")
        self.assertNotIn(1, self.carts.carts)

    def test_add_item_unknown_product(self):
        with self.assertRaises(OutOfStockError):
            self.service.add_item(1, "p404")

    def test_carts_are_per_owner(self):
        self.add("p1", owner=1)
        self.add("p2", owner=2)
        self.assertEqual([l.id for l in self.service.get_cart(1).lines], ["p1"])
        self.assertEqual([l.id for l in self.service.get_cart(2).lines], ["p2"])

    def test_change_quantity_and_stale_index(self):
        self.add("p1")
        dto = self.service.change_quantity(1, 0, 4)
        self.assertEqual(dto.lines[0].qty, 5)
        self.carts.fail_save = True
        dto = self.service.change_quantity(1, 9, 1)
        self.assertEqual(dto.lines[0].qty, 5)

    def test_remove_line_and_empty_cart(self):
        self.add("p1")
        self.add("p2")
        self.assertEqual([l.id for l in self.service.remove_line(1, 0).lines], ["p2"])
        self.assertEqual(self.service.empty_cart(1).lines, [])
        self.assertEqual(self.carts.carts[1], [])

    def test_failed_save_exposes_pending_cart(self):
        self.add("p1")
        self.carts.fail_save = True
        with self.assertRaises(PersistenceError) as ctx:
            self.service.add_item(1, "p1")
        pending = ctx.exception.pending
        self.assertEqual(pending.lines[0].qty, 2)
        self.assertEqual(self.carts.carts[1][0].qty, 1)

    def test_checkout_deducts_stock_and_clears_cart(self):
        self.add("p1", times=3)
        result = self.service.checkout(1)
        self.assertEqual(result.total, Decimal("59.97"))
        self.assertEqual(result.catalog["p1"].qty, 7)
        self.assertEqual(self.products.qty("p1"), 7)
        self.assertEqual(self.carts.carts[1], [])
        self.assertEqual(self.cache.invalidations, 1)

    def test_checkout_locks_catalog_before_reading_cart(self):
        self.add("p1")
        self.carts.events.clear()
        self.service.checkout(1)
        self.assertEqual(
            self.carts.events[:4],
            [("begin", None), ("lock_catalog", None), ("lock_owner", 1), ("load", 1)],
        )
        self.assertEqual(self.carts.events[-1], ("commit", None))

    def test_cart_edits_lock_owner_before_reading_cart(self):
        self.add("p1")
        edits = {
            "add_item": lambda: self.service.add_item(1, "p2"),
            "change_quantity": lambda: self.service.change_quantity(1, 0, 2),
            "stale_change_quantity": lambda: self.service.change_quantity(1, 9, 2),
            "remove_line": lambda: self.service.remove_line(1, 1),
            "empty_cart": lambda: self.service.empty_cart(1),
        }
        for name, edit in edits.items():
            with self.subTest(edit=name):
                self.carts.events.clear()
                edit()
                self.assertEqual(
                    self.carts.events[:3],
                    [("begin", None), ("lock_owner", 1), ("load", 1)],
                )
                self.assertEqual(self.carts.events[-1], ("commit", None))

    def test_failed_edit_rolls_back_under_owner_lock(self):
        self.add("p1")
        self.carts.events.clear()
        self.carts.fail_save = True
        with self.assertRaises(PersistenceError):
            self.service.empty_cart(1)
        self.assertEqual(
            self.carts.events,
            [("begin", None), ("lock_owner", 1), ("load", 1), ("rollback", None)],
        )
        self.assertEqual(len(self.carts.carts[1]), 1)

    def test_get_cart_reads_without_owner_lock(self):
        self.add("p1")
        self.carts.events.clear()
        self.service.get_cart(1)
        self.assertEqual(self.carts.events, [("load", 1)])

    def test_checkout_insufficient_stock_leaves_everything(self):
        self.products.rows[1].qty = 1
        self.add("p2", times=2)
        with self.assertRaises(InsufficientStockError) as ctx:
            self.service.checkout(1)
        self.assertEqual(ctx.exception.product_id, "p2")
        self.assertEqual(self.products.qty("p2"), 1)
        self.assertEqual(self.carts.carts[1][0].qty, 2)
        self.assertEqual(self.products.saves, 0)
        self.assertEqual(self.cache.invalidations, 0)

    def test_checkout_after_product_deleted(self):
        self.add("p3")
        self.products.rows = [p for p in self.products.rows if p.id != "p3"]
        with self.assertRaises(InsufficientStockError) as ctx:
            self.service.checkout(1)
        self.assertEqual(ctx.exception.available, 0)
        self.assertEqual(len(self.carts.carts[1]), 1)

    def test_checkout_empty_cart(self):
        with self.assertRaises(EmptyCartError):
            self.service.checkout(1)

    def test_checkout_uses_saved_lines_not_cached_listing(self):
        self.add("p1", times=2)
        self.cache.set(None, [])
        self.products.rows[0].qty = 1
        with self.assertRaises(InsufficientStockError):
            self.service.checkout(1)

    def test_second_checkout_sees_cleared_cart(self):
        self.add("p1")
        self.service.checkout(1)
        with self.assertRaises(EmptyCartError):
            self.service.checkout(1)
        self.assertEqual(self.products.qty("p1"), 9)

    def test_add_item_after_snapshot_line_keeps_price(self):
        self.add("p1")
        self.products.rows[0].price = Decimal("30.00")
        dto = self.add("p1")
        self.assertEqual(dto.lines[0].price, Decimal("19.99"))
        self.assertEqual(dto.lines[0], CartLineDTO("p1", "Trekking Poles", Decimal("19.99"), 2))
