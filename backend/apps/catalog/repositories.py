from typing import Iterable, List, Optional

from django.db import transaction

from apps.common.repository import GenericRepository

from .dtos import ProductDTO
from .mappers import ProductMapper
from .models import Product


class ProductRepository(GenericRepository[Product]):
    """Catalog store backed by the ``Product`` table."""

    def __init__(self):
        super().__init__(Product)

    def load(self, for_update: bool = False) -> List[ProductDTO]:
        """Whole catalog in display order.

        ``for_update`` row-locks the products; callers must already be inside
        ``transaction.atomic()``.
        """
        with self.guard("load"):
            qs = self.model.objects.order_by("position", "id")
            if for_update:
                qs = qs.select_for_update()
            return ProductMapper.many_to_dto(qs)

    def find(self, product_id: str) -> Optional[ProductDTO]:
        with self.guard("find"):
            product = self.model.objects.filter(id=product_id).first()
        return ProductMapper.to_dto(product) if product else None

    def save(self, products: Iterable[ProductDTO]) -> None:
        """Replace the stored catalog with ``products``, keeping their order."""
        with self.guard("save"):
            with transaction.atomic():
                kept = []
                for position, dto in enumerate(products):
                    self.model.objects.update_or_create(
                        id=dto.id, defaults=ProductMapper.to_fields(dto, position)
                    )
                    kept.append(dto.id)
                self.model.objects.exclude(id__in=kept).delete()
