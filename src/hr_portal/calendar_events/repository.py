from __future__ import annotations

from typing import Optional, Protocol

from .model import EventCategory


class EventCategoryRepository(Protocol):
    def get_by_id(self, category_id: int) -> Optional[EventCategory]:
        raise NotImplementedError

    def name_taken(self, name: str, *, exclude_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def create(self, category: EventCategory) -> int:
        raise NotImplementedError

    def update(self, category: EventCategory) -> None:
        raise NotImplementedError

    def count_events(self, category_id: int) -> int:
        """Number of calendar events that reference the category."""

        raise NotImplementedError

    def delete(self, category_id: int) -> None:
        raise NotImplementedError
