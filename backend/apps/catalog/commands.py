import math
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Optional

from apps.common.errors import InvalidInputError

from .constants import MAX_PRICE, MAX_QTY

CENT = Decimal("0.01")

# Leading number of a free-text field: "12.5 EUR" -> "12.5", "5 units" -> "5"
PRICE_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
QTY_PREFIX = re.compile(r"^\s*([+-]?)(\d+)")


def _too_large(field: str, raw: Any, limit: Any) -> InvalidInputError:
    return InvalidInputError(
        f"{field.capitalize()} is too large",
        details={field: str(raw), "max": str(limit)},
    )


def parse_price(raw: Any) -> Decimal:
    """Non-negative two-decimal price read from the leading number of ``raw``.

    Text without a leading number, negatives and non-finite values are 0;
    anything above ``MAX_PRICE`` is rejected.
    """
    if raw is None or isinstance(raw, bool):
        return Decimal("0.00")
    match = PRICE_PREFIX.match(str(raw))
    if not match:
        return Decimal("0.00")
    try:
        value = Decimal(match.group(1))
    except InvalidOperation:
        return Decimal("0.00")
    if value < 0:
        return Decimal("0.00")
    if value > MAX_PRICE + CENT:
        raise _too_large("price", raw, MAX_PRICE)
    value = value.quantize(CENT, rounding=ROUND_HALF_UP)
    if value > MAX_PRICE:
        raise _too_large("price", raw, MAX_PRICE)
    return value


def parse_qty(raw: Any) -> int:
    """Non-negative integer quantity read from the leading digits of ``raw``.

    Floats are truncated, junk and negatives are 0; anything above
    ``MAX_QTY`` is rejected.
    """
    if raw is None or isinstance(raw, bool):
        return 0
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return 0
        if raw > MAX_QTY:
            raise _too_large("qty", raw, MAX_QTY)
        return max(int(raw), 0)
    match = QTY_PREFIX.match(str(raw))
    if not match:
        return 0
    sign, digits = match.groups()
    if sign == "-":
        return 0
    digits = digits.lstrip("0") or "0"
    if len(digits) > len(str(MAX_QTY)) or int(digits) > MAX_QTY:
        raise _too_large("qty", raw, MAX_QTY)
    return int(digits)


@dataclass
class ProductUpsertCommand:
    title: str
    price: Decimal
    qty: int
    img: Optional[str] = None

    @staticmethod
    def from_raw(payload: Dict[str, Any]):
        data = dict(payload or {})
        title = str(data.get("title") or "").strip()
        if not title:
            raise InvalidInputError("Enter product title", details={"title": "required"})
        img = str(data.get("img") or "").strip() or None
        return ProductUpsertCommand(
            title=title,
            price=parse_price(data.get("price")),
            qty=parse_qty(data.get("qty")),
            img=img,
        )
