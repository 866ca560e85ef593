from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from apps.common import get_logger
from apps.common.errors import NotFoundError

from .commands import HikePlanCommand, parse_difficulty
from .constants import DIFFICULTY_ITEMS
from .dtos import HikePlanDTO
from .protocols import HikePlanStoreProtocol

logger = get_logger(__name__).bind(component="hikes", layer="service")


class HikeService:
    def __init__(self, plans: HikePlanStoreProtocol):
        self.plans = plans
        self.logger = logger.bind(service="HikeService")

    def list_plans(self, owner_id: int, difficulty: Optional[str] = None) -> List[HikePlanDTO]:
        level = parse_difficulty(difficulty, default=None)
        self.logger.debug("Listing hike plans", owner_id=owner_id, difficulty=level)
        return self.plans.list_for_owner(owner_id, difficulty=level)

    def create_plan(
        self, owner_id: int, data: Union[Dict[str, Any], HikePlanCommand]
    ) -> HikePlanDTO:
        cmd = data if isinstance(data, HikePlanCommand) else HikePlanCommand.from_raw(data)
        plan = self.plans.create_for_owner(owner_id, **cmd.to_fields())
        self.logger.info(
            "Hike plan created", owner_id=owner_id, plan_id=plan.id, difficulty=plan.difficulty
        )
        return plan

    def update_plan(
        self, owner_id: int, plan_id: int, data: Union[Dict[str, Any], HikePlanCommand]
    ) -> HikePlanDTO:
        cmd = data if isinstance(data, HikePlanCommand) else HikePlanCommand.from_raw(data)
        plan = self.plans.update_for_owner(owner_id, plan_id, **cmd.to_fields())
        if plan is None:
            raise self._not_found(owner_id, plan_id)
        self.logger.info("Hike plan updated", owner_id=owner_id, plan_id=plan_id)
        return plan

    def delete_plan(self, owner_id: int, plan_id: int) -> None:
        if not self.plans.delete_for_owner(owner_id, plan_id):
            raise self._not_found(owner_id, plan_id)
        self.logger.info("Hike plan deleted", owner_id=owner_id, plan_id=plan_id)

    def clear_plans(self, owner_id: int) -> int:
        removed = self.plans.clear_for_owner(owner_id)
        self.logger.info("Hike plans cleared", owner_id=owner_id, removed=removed)
        return removed

    def toggle_favorite(self, owner_id: int, plan_id: int) -> HikePlanDTO:
        current = self.plans.get_for_owner(owner_id, plan_id)
        if current is None:
            raise self._not_found(owner_id, plan_id)
        plan = self.plans.update_for_owner(
            owner_id, plan_id, is_favorite=not current.is_favorite
        )
        self.logger.info(
            "Hike plan favorite toggled",
            owner_id=owner_id,
            plan_id=plan_id,
            is_favorite=plan.is_favorite,
        )
        return plan

    @staticmethod
    def suggested_items(difficulty: Optional[str] = None) -> List[str]:
        return list(DIFFICULTY_ITEMS[parse_difficulty(difficulty)])

    def _not_found(self, owner_id: int, plan_id: int) -> NotFoundError:
        self.logger.info("Hike plan not found", owner_id=owner_id, plan_id=plan_id)
        return NotFoundError("Hike plan not found", details={"id": plan_id})
