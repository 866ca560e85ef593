from __future__ import annotations

from typing import Any, List, Optional, Protocol

from .dtos import HikePlanDTO


class HikePlanStoreProtocol(Protocol):
    def list_for_owner(self, owner_id: int, difficulty: Optional[str] = None) -> List[HikePlanDTO]:
        ...

    def get_for_owner(self, owner_id: int, plan_id: int) -> Optional[HikePlanDTO]:
        ...

    def create_for_owner(self, owner_id: int, **fields: Any) -> HikePlanDTO:
        ...

    def update_for_owner(self, owner_id: int, plan_id: int, **fields: Any) -> Optional[HikePlanDTO]:
        ...

    def delete_for_owner(self, owner_id: int, plan_id: int) -> bool:
        ...

    def clear_for_owner(self, owner_id: int) -> int:
        ...
