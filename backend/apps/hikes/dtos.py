from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class HikePlanDTO:
    id: int
    name: str
    location: str
    difficulty: str
    notes: str
    is_favorite: bool = False
    created_at: Optional[datetime] = None
