from decimal import Decimal

COLOR_PALETTE = (
    "#2b8aef",
    "#f97316",
    "#10b981",
    "#eab308",
    "#8b5cf6",
    "#ec4899",
)

# (id, title, price, qty, img, color)
DEFAULT_PRODUCTS = (
    ("p1", "Trekking Poles", Decimal("19.99"), 10, "images/product1.png", "#2b8aef"),
    ("p2", "Water Bottle", Decimal("9.50"), 25, "images/product2.png", "#10b981"),
    ("p3", "Backpack 20L", Decimal("29.99"), 8, "images/product3.png", "#f97316"),
)

PRODUCT_ID_PREFIX = "p"

# Largest values the Product columns hold: DecimalField(10, 2) and a 32-bit integer
MAX_PRICE = Decimal("99999999.99")
MAX_QTY = 2147483647
