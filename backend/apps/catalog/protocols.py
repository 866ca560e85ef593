from __future__ import annotations

from typing import Any, Iterable, List, Optional, Protocol

from .dtos import ProductDTO


class CatalogStoreProtocol(Protocol):
    def load(self, for_update: bool = False) -> List[ProductDTO]:
        ...

    def save(self, products: Iterable[ProductDTO]) -> None:
        ...

    def find(self, product_id: str) -> Optional[ProductDTO]:
        ...


class CacheBackendProtocol(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any, timeout: Optional[int] = None) -> None:
        ...
