import logging
import unittest
from decimal import Decimal

from apps.carts.dtos import CartLineDTO
from apps.catalog.dtos import ProductDTO
from apps.common.logger import get_logger, render


class ContextLoggerTests(unittest.TestCase):
    def test_bind_merges_context_without_mutating_parent(self):
        parent = get_logger("apps.tests").bind(component="carts")
        child = parent.bind(service="CartService")
        self.assertEqual(parent.context, {"component": "carts"})
        self.assertEqual(child.context, {"component": "carts", "service": "CartService"})
        self.assertIs(child.logger, logging.getLogger("apps.tests"))

    def test_render_appends_key_values(self):
        line = render("Checkout completed", {"owner_id": 3, "total": Decimal("59.97"), "ids": ["p1"]})
        self.assertEqual(line, "Checkout completed | owner_id=3 total=59.97 ids=[p1]")

    def test_render_shows_products_and_lines_by_id(self):
        product = ProductDTO(id="p2", title="Water Bottle", price=Decimal("9.50"), qty=25)
        line = CartLineDTO("p1", "Trekking Poles", Decimal("19.99"), 2)
        self.assertEqual(
            render("Checkout rejected", {"product": product, "lines": [line, product]}),
            "Checkout rejected | product=p2 lines=[p1,p2]",
        )

    def test_render_without_context_is_plain_message(self):
        self.assertEqual(render("Listing products", {}), "Listing products")

    def test_records_include_bound_context(self):
        log = get_logger("apps.tests.logger").bind(layer="service")
        with self.assertLogs("apps.tests.logger", level=logging.INFO) as captured:
            log.info("Cart emptied", owner_id=7)
        self.assertEqual(captured.records[0].getMessage(), "Cart emptied | layer=service owner_id=7")

    def test_exception_attaches_traceback(self):
        log = get_logger("apps.tests.logger").bind(layer="api")
        with self.assertLogs("apps.tests.logger", level=logging.ERROR) as captured:
            try:
                raise RuntimeError("boom")
            except RuntimeError:
                log.exception("Unhandled exception", path="/api/cart/")
        record = captured.records[0]
        self.assertEqual(record.getMessage(), "Unhandled exception | layer=api path=/api/cart/")
        self.assertIs(record.exc_info[0], RuntimeError)

    def test_disabled_level_is_not_rendered(self):
        log = get_logger("apps.tests.logger.quiet")
        with self.assertLogs("apps.tests.logger.quiet", level=logging.INFO) as captured:
            log.debug("Fetching cart", owner_id=1)
            log.info("Cart emptied")
        self.assertEqual([r.getMessage() for r in captured.records], ["Cart emptied"])
