from __future__ import annotations

from typing import Iterable, List, Protocol

from .dtos import CartLineDTO


class CartStoreProtocol(Protocol):
    """Per-owner cart snapshots."""

    def lock(self, owner_id: int) -> None:
        """Serialize writers of this owner's cart until the transaction ends."""
        ...

    def load(self, owner_id: int) -> List[CartLineDTO]:
        ...

    def save(self, owner_id: int, lines: Iterable[CartLineDTO]) -> None:
        ...
