from typing import Iterable, List

from .dtos import HikePlanDTO
from .models import HikePlan


class HikePlanMapper:
    @staticmethod
    def to_dto(plan: HikePlan) -> HikePlanDTO:
        return HikePlanDTO(
            id=plan.id,
            name=plan.name,
            location=plan.location or "",
            difficulty=plan.difficulty,
            notes=plan.notes or "",
            is_favorite=plan.is_favorite,
            created_at=plan.created_at,
        )

    @staticmethod
    def many_to_dto(plans: Iterable[HikePlan]) -> List[HikePlanDTO]:
        return [HikePlanMapper.to_dto(p) for p in plans]
