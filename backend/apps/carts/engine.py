"""Cart and inventory reconciliation.

The cart only records requested quantities; stock is checked again and
deducted exclusively by :func:`checkout`, against whatever catalog snapshot
the caller loaded at that moment.
"""
from dataclasses import replace
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from apps.catalog.constants import MAX_QTY
from apps.catalog.dtos import Catalog
from apps.common.errors import EmptyCartError, InsufficientStockError, OutOfStockError

from .dtos import CartDTO, CartLineDTO, CheckoutResult


def cart_total(lines: Iterable[CartLineDTO]) -> Decimal:
    return sum((line.subtotal for line in lines), Decimal("0.00"))


class CartEngine:
    """One owner's cart. Indices are positions in ``lines``."""

    def __init__(self, lines: Optional[Iterable[CartLineDTO]] = None):
        self.lines: List[CartLineDTO] = [replace(line) for line in (lines or [])]

    def _line_for(self, product_id: str) -> Optional[CartLineDTO]:
        for line in self.lines:
            if line.id == product_id:
                return line
        return None

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self.lines)

    def add_to_cart(self, catalog: Catalog, product_id: str) -> CartLineDTO:
        product = catalog.get(product_id)
        if product is None or product.qty <= 0:
            raise OutOfStockError(product_id)
        line = self._line_for(product_id)
        if line is not None:
            line.qty = min(line.qty + 1, MAX_QTY)
            return line
        line = CartLineDTO(id=product.id, title=product.title, price=product.price, qty=1)
        self.lines.append(line)
        return line

    def change_quantity(self, index: int, delta: int) -> bool:
        """Apply ``delta``; a line at or below zero is dropped. Stale index: no-op.

        A line never grows past ``MAX_QTY``, the largest storable quantity.
        """
        if not self._in_range(index):
            return False
        line = self.lines[index]
        line.qty = min(line.qty + delta, MAX_QTY)
        if line.qty <= 0:
            del self.lines[index]
        return True

    def remove_line(self, index: int) -> bool:
        if not self._in_range(index):
            return False
        del self.lines[index]
        return True

    def empty(self) -> None:
        self.lines = []

    def total(self) -> Decimal:
        return cart_total(self.lines)

    def snapshot(self) -> CartDTO:
        lines = [replace(line) for line in self.lines]
        return CartDTO(
            lines=lines,
            total=cart_total(lines),
            count=sum(line.qty for line in lines),
        )


def checkout(lines: Iterable[CartLineDTO], catalog: Catalog) -> CheckoutResult:
    """Validate every line against ``catalog`` and deduct stock all-or-nothing.

    Neither argument is mutated. A line whose product no longer exists counts
    as zero available stock.
    """
    lines = list(lines)
    if not lines:
        raise EmptyCartError()

    demand: Dict[str, int] = {}
    titles: Dict[str, str] = {}
    for line in lines:
        demand[line.id] = demand.get(line.id, 0) + line.qty
        titles.setdefault(line.id, line.title)

    shortages = []
    for product_id, requested in demand.items():
        product = catalog.get(product_id)
        available = product.qty if product is not None else 0
        if requested > available:
            shortages.append(
                {
                    "id": product_id,
                    "title": product.title if product is not None else titles[product_id],
                    "requested": requested,
                    "available": available,
                }
            )
    if shortages:
        raise InsufficientStockError(shortages)

    updated = {pid: replace(product) for pid, product in catalog.items()}
    for product_id, requested in demand.items():
        product = updated.get(product_id)
        if product is not None:
            product.qty = max(product.qty - requested, 0)

    purchased = [replace(line) for line in lines]
    return CheckoutResult(
        catalog=updated,
        cart=[],
        total=cart_total(purchased),
        purchased=purchased,
    )
