from typing import Any, List, Optional

from apps.common import get_logger

from .dtos import ProductDTO
from .protocols import CacheBackendProtocol

logger = get_logger(__name__).bind(component="catalog", layer="cache")


class ProductListCache:
    """Versioned read-through cache for catalog listings.

    Every catalog write bumps the version so stale listings are never served;
    old keys simply expire. Checkout never reads from here.
    """

    prefix = "products:list"

    def __init__(self, backend: CacheBackendProtocol, *, enabled: bool = True):
        self.backend = backend
        self.enabled = enabled
        self._version_key = f"{self.prefix}:version"

    def _version(self) -> int:
        return self.backend.get(self._version_key) or 1

    def key(self, search: Optional[str]) -> str:
        term = (search or "").strip().casefold() or "all"
        return f"{self.prefix}:v{self._version()}:{term}"

    def get(self, search: Optional[str]) -> Optional[List[ProductDTO]]:
        if not self.enabled:
            return None
        return self.backend.get(self.key(search))

    def set(self, search: Optional[str], products: List[ProductDTO]) -> None:
        if self.enabled:
            self.backend.set(self.key(search), products)

    def invalidate(self) -> Any:
        version = self._version() + 1
        # The version key itself must never expire
        self.backend.set(self._version_key, version, timeout=None)
        logger.debug("Bumped product list cache version", version=version)
        return version
