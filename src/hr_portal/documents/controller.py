from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, error_response, login_required, server_error
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.document_service

    @app.route("/api/documents/<int:document_id>", methods=["GET"], endpoint="documents_show")
    @login_required
    def documents_show(document_id: int):
        try:
            return jsonify(service.get(document_id).to_dict())
        except DomainError as e:
            return error_response(e)

    @app.route("/api/documents/<int:document_id>/extract", methods=["POST"], endpoint="documents_extract")
    @admin_required
    def documents_extract(document_id: int):
        try:
            service.request_extraction(document_id)
        except DomainError as e:
            return error_response(e)
        except Exception:
            return server_error("documents_extract")
        return jsonify({"message": "Extraction queued.", "document_id": document_id}), 202
