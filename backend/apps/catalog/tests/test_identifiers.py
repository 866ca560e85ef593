import random
import re
import unittest

from apps.catalog.constants import COLOR_PALETTE
from apps.catalog.identifiers import ColorPicker, ProductIdFactory


class ProductIdFactoryTests(unittest.TestCase):
    def test_ids_have_prefix_and_hex_body(self):
        new_id = ProductIdFactory(random.Random(1))()
        self.assertRegex(new_id, re.compile(r"^p[0-9a-f]{10}$"))

    def test_seeded_factories_agree(self):
        self.assertEqual(ProductIdFactory(random.Random(7))(), ProductIdFactory(random.Random(7))())

    def test_redraws_on_collision(self):
        taken = ProductIdFactory(random.Random(3))()
        fresh = ProductIdFactory(random.Random(3))({taken})
        self.assertNotEqual(fresh, taken)


class ColorPickerTests(unittest.TestCase):
    def test_picks_from_palette(self):
        picker = ColorPicker(random.Random(5))
        for _ in range(20):
            self.assertIn(picker(), COLOR_PALETTE)

    def test_empty_palette_rejected(self):
        with self.assertRaises(ValueError):
            ColorPicker(palette=())
