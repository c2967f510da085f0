from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.enums import Role
from ..core.exceptions import ApiError, AuthorizationError, ValidationError
from ..container import Container
from ..users.guards import role_required


def register(app: Flask, container: Container) -> None:
    @app.route("/admin-sessions", endpoint="admin_sessions")
    @role_required(Role.ADMIN)
    def admin_sessions():
        search = request.args.get("q", "")
        items = []
        try:
            items = container.session_service.list_sessions(
                current_user=container.auth_service.current_user(),
                search=search,
            )
        except (AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return render_template("sessions/index.html", sessions=items, search=search, active_page="admin_sessions")

    @app.route("/admin-sessions/<path:token>/delete", methods=["POST"], endpoint="delete_admin_session")
    @role_required(Role.ADMIN)
    def delete_admin_session(token: str):
        try:
            container.session_service.force_logout(current_user=container.auth_service.current_user(), token=token)
            flash("Sessiya yopildi.", "success")
        except (ValidationError, AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return redirect(url_for("admin_sessions"))
