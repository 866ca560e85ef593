from typing import Iterable, List

from django.contrib.auth import get_user_model
from django.db import transaction

from apps.common.repository import GenericRepository

from .dtos import CartLineDTO
from .mappers import CartLineMapper
from .models import CartLine


class CartLineRepository(GenericRepository[CartLine]):
    def __init__(self):
        super().__init__(CartLine)

    def lock(self, owner_id: int) -> None:
        """Row-lock the owner; callers must already be inside ``transaction.atomic()``."""
        with self.guard("lock"):
            list(
                get_user_model()
                .objects.select_for_update()
                .filter(pk=owner_id)
                .values_list("pk", flat=True)
            )

    def load(self, owner_id: int) -> List[CartLineDTO]:
        with self.guard("load"):
            qs = self.model.objects.filter(owner_id=owner_id).order_by("position", "id")
            return CartLineMapper.many_to_dto(qs)

    def save(self, owner_id: int, lines: Iterable[CartLineDTO]) -> None:
        rows = [
            CartLineMapper.to_model(owner_id, line, position)
            for position, line in enumerate(lines)
        ]
        with self.guard("save"):
            with transaction.atomic():
                self.model.objects.filter(owner_id=owner_id).delete()
                if rows:
                    self.model.objects.bulk_create(rows)
