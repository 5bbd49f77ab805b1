from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import EventCategory
from .repository import EventCategoryRepository


def _to_category(row: Dict[str, Any]) -> EventCategory:
    return EventCategory(
        category_id=int(row["category_id"]),
        user_id=int(row["user_id"]),
        name=row["name"],
        color=row["color"],
    )


class MySQLEventCategoryRepository(EventCategoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, category_id: int) -> Optional[EventCategory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT category_id, user_id, name, color FROM event_categories WHERE category_id=%s",
                (category_id,),
            )
            row = fetchone(cur)
            return _to_category(row) if row else None

    def name_taken(self, name: str, *, exclude_id: Optional[int] = None) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if exclude_id is None:
                cur.execute("SELECT 1 AS hit FROM event_categories WHERE name=%s LIMIT 1", (name,))
            else:
                cur.execute(
                    "SELECT 1 AS hit FROM event_categories WHERE name=%s AND category_id<>%s LIMIT 1",
                    (name, exclude_id),
                )
            return fetchone(cur) is not None

    def create(self, category: EventCategory) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO event_categories(user_id, name, color) VALUES(%s,%s,%s)",
                (category.user_id, category.name, category.color),
            )
            return int(cur.lastrowid)

    def update(self, category: EventCategory) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE event_categories SET name=%s, color=%s WHERE category_id=%s",
                (category.name, category.color, category.category_id),
            )

    def count_events(self, category_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM calendar_events WHERE category_id=%s", (category_id,))
            return int((fetchone(cur) or {}).get("total") or 0)

    def delete(self, category_id: int) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM event_categories WHERE category_id=%s", (category_id,))
