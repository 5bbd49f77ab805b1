from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import error_response, login_required, server_error
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.calendar_service

    @app.route("/api/event-categories", methods=["POST"], endpoint="event_categories_store")
    @login_required
    def event_categories_store():
        payload = request.get_json(silent=True) or {}
        try:
            category = service.create_category(user_id=int(session["user_id"]), payload=payload)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("event_categories_store")
        return jsonify({"message": "Category created successfully.", "category": category.to_dict()}), 201

    @app.route("/api/event-categories/<int:category_id>", methods=["PUT", "PATCH"], endpoint="event_categories_update")
    @login_required
    def event_categories_update(category_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            category = service.update_category(category_id=category_id, payload=payload)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("event_categories_update")
        return jsonify({"message": "Category updated successfully.", "category": category.to_dict()})

    @app.route("/api/event-categories/<int:category_id>", methods=["DELETE"], endpoint="event_categories_destroy")
    @login_required
    def event_categories_destroy(category_id: int):
        try:
            service.delete_category(category_id)
        except DomainError as e:
            return error_response(e)
        return jsonify({"message": "Category deleted successfully."})
