from .repositories import HikePlanRepository
from .services import HikeService


def build_hike_service() -> HikeService:
    return HikeService(plans=HikePlanRepository())
