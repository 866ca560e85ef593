from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from apps.common.errors import InvalidInputError

from .constants import DEFAULT_DIFFICULTY, DIFFICULTIES


def parse_difficulty(raw: Any, *, default: Optional[str] = DEFAULT_DIFFICULTY) -> Optional[str]:
    """Canonical difficulty level, matched case-insensitively.

    Blank input yields ``default``; anything else unknown is rejected.
    """
    text = str(raw or "").strip()
    if not text:
        return default
    for level in DIFFICULTIES:
        if level.lower() == text.lower():
            return level
    raise InvalidInputError(
        "Unknown difficulty",
        details={"difficulty": text, "choices": list(DIFFICULTIES)},
    )


@dataclass
class HikePlanCommand:
    name: str
    location: str = ""
    difficulty: str = DEFAULT_DIFFICULTY
    notes: str = ""

    @staticmethod
    def from_raw(payload: Dict[str, Any]):
        data = dict(payload or {})
        name = str(data.get("name") or "").strip()
        if not name:
            raise InvalidInputError("Name required", details={"name": "required"})
        return HikePlanCommand(
            name=name,
            location=str(data.get("location") or "").strip(),
            difficulty=parse_difficulty(data.get("difficulty")),
            notes=str(data.get("notes") or "").strip(),
        )

    def to_fields(self) -> Dict[str, Any]:
        return asdict(self)
