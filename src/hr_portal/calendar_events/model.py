from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class EventCategory:
    category_id: Optional[int]
    user_id: int
    name: str
    color: str

    def to_dict(self) -> dict:
        return {"id": self.category_id, "name": self.name, "color": self.color}
