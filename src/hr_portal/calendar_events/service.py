from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping

from ..common.validators import require_hex_color, require_max_length, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from .model import EventCategory
from .repository import EventCategoryRepository

logger = logging.getLogger(__name__)

COLOR_MESSAGE = "Color must be a valid hex color code (e.g., #FF5733)."


class CalendarService:
    """Use cases: manage event categories."""

    def __init__(self, categories: EventCategoryRepository):
        self._categories = categories

    def _clean(self, payload: Mapping[str, Any], *, exclude_id: int | None = None) -> dict:
        name = require_non_empty(payload.get("name"), "name", "Category name is required.")
        require_max_length(name, "name", 255)
        if self._categories.name_taken(name, exclude_id=exclude_id):
            raise ValidationError("A category with this name already exists.", field="name")

        color = payload.get("color")
        if color is None or color == "":
            raise ValidationError("Category color is required.", field="color")
        return {"name": name, "color": require_hex_color(color, "color", COLOR_MESSAGE)}

    def get_category(self, category_id: int) -> EventCategory:
        category = self._categories.get_by_id(int(category_id))
        if not category:
            raise NotFoundError("Category not found.")
        return category

    def create_category(self, *, user_id: int, payload: Mapping[str, Any]) -> EventCategory:
        fields = self._clean(payload)
        category = EventCategory(category_id=None, user_id=int(user_id), **fields)
        category_id = self._categories.create(category)
        logger.info("Event category %s (%s) created by user_id=%s", category_id, fields["name"], user_id)
        return replace(category, category_id=category_id)

    def update_category(self, *, category_id: int, payload: Mapping[str, Any]) -> EventCategory:
        current = self.get_category(category_id)
        updated = replace(current, **self._clean(payload, exclude_id=current.category_id))
        self._categories.update(updated)
        return updated

    def delete_category(self, category_id: int) -> None:
        category = self.get_category(category_id)
        if self._categories.count_events(category.category_id) > 0:
            raise ValidationError("Cannot delete category. It is currently being used by one or more events.")
        self._categories.delete(category.category_id)
        logger.info("Event category %s deleted", category.category_id)
