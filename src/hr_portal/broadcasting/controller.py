from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.http import login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    broadcaster = container.broadcaster

    @app.route("/broadcasting/auth", methods=["POST"], endpoint="broadcasting_auth")
    @login_required
    def broadcasting_auth():
        data = request.get_json(silent=True) or request.form or {}
        channel_name = str(data.get("channel_name") or "")
        # Clients may send the prefixed form used by websocket libraries.
        if channel_name.startswith("private-"):
            channel_name = channel_name[len("private-"):]

        if not channel_name or not broadcaster.authorize(channel_name, int(session["user_id"])):
            return jsonify({"message": "This action is unauthorized."}), 403
        return jsonify({"channel": channel_name})

    @app.route("/broadcasting/<path:channel_name>/events", methods=["GET"], endpoint="broadcasting_events")
    @login_required
    def broadcasting_events(channel_name: str):
        if not broadcaster.authorize(channel_name, int(session["user_id"])):
            return jsonify({"message": "This action is unauthorized."}), 403
        return jsonify(broadcaster.recent(channel_name))
