from typing import Any, List, Optional

from apps.common.repository import GenericRepository

from .dtos import HikePlanDTO
from .mappers import HikePlanMapper
from .models import HikePlan


class HikePlanRepository(GenericRepository[HikePlan]):
    """Hike plans, always filtered to a single owner."""

    def __init__(self):
        super().__init__(HikePlan)

    def list_for_owner(self, owner_id: int, difficulty: Optional[str] = None) -> List[HikePlanDTO]:
        filters = {"owner_id": owner_id}
        if difficulty:
            filters["difficulty"] = difficulty
        return HikePlanMapper.many_to_dto(self.list(**filters))

    def get_for_owner(self, owner_id: int, plan_id: int) -> Optional[HikePlanDTO]:
        plan = self.get(owner_id=owner_id, id=plan_id)
        return HikePlanMapper.to_dto(plan) if plan else None

    def create_for_owner(self, owner_id: int, **fields: Any) -> HikePlanDTO:
        return HikePlanMapper.to_dto(self.create(owner_id=owner_id, **fields))

    def update_for_owner(self, owner_id: int, plan_id: int, **fields: Any) -> Optional[HikePlanDTO]:
        plan = self.get(owner_id=owner_id, id=plan_id)
        if not plan:
            return None
        return HikePlanMapper.to_dto(self.update(plan, **fields))

    def delete_for_owner(self, owner_id: int, plan_id: int) -> bool:
        plan = self.get(owner_id=owner_id, id=plan_id)
        if not plan:
            return False
        self.delete(plan)
        return True

    def clear_for_owner(self, owner_id: int) -> int:
        with self.guard("clear"):
            deleted, _ = self.model.objects.filter(owner_id=owner_id).delete()
        return deleted
