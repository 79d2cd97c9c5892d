from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        user = container.auth_service.authenticate(str(data.get("username", "")), str(data.get("password", "")))

        session.clear()
        session["username"] = user.username
        session["role"] = user.role.value
        app.logger.info("Admin %s logged in", user.username)
        return jsonify({"success": True, "username": user.username, "role": user.role.value})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify({"username": session["username"], "role": session.get("role")})
