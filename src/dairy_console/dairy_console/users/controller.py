from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.enums import Role
from ..core.exceptions import ApiError, AuthenticationError, AuthorizationError, ValidationError
from ..container import Container
from .guards import role_required


def _safe_next(target: str) -> str:
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return ""


def register(app: Flask, container: Container) -> None:
    @app.route("/", endpoint="index")
    def index():
        if container.auth_service.is_authenticated():
            return redirect(url_for("dashboard"))
        return redirect(url_for("login"))

    @app.route("/login", methods=["GET", "POST"], endpoint="login")
    def login():
        if container.auth_service.is_authenticated():
            return redirect(url_for("dashboard"))

        next_url = _safe_next(request.values.get("next", ""))

        if request.method == "POST":
            username = request.form.get("username", "")
            password = request.form.get("password", "")
            remember = bool(request.form.get("remember_me"))

            try:
                container.auth_service.login(username, password, remember=remember)
                flash("Tizimga muvaffaqiyatli kirdingiz!", "success")
                return redirect(next_url or url_for("dashboard"))
            except (ValidationError, AuthenticationError, ApiError) as e:
                flash(str(e), "danger")

        return render_template("login.html", next_url=next_url)

    @app.route("/logout", endpoint="logout")
    def logout():
        container.auth_service.logout()
        flash("Tizimdan chiqdingiz.", "info")
        return redirect(url_for("login"))

    @app.route("/users", methods=["GET"], endpoint="users")
    @role_required(Role.ADMIN)
    def users():
        search = request.args.get("q", "")
        items = []
        try:
            current = container.auth_service.refresh_current_user()
            items = container.user_service.list_users(current_user=current, search=search)
        except (AuthorizationError, ApiError) as e:
            flash(str(e), "danger")

        return render_template(
            "users/index.html",
            users=items,
            roles=list(Role),
            search=search,
            active_page="users",
        )

    @app.route("/users", methods=["POST"], endpoint="create_user")
    @role_required(Role.ADMIN)
    def create_user():
        try:
            created = container.user_service.create_user(
                current_user=container.auth_service.current_user(),
                username=request.form.get("username", ""),
                password=request.form.get("password", ""),
                role=request.form.get("role", Role.USER.value),
            )
            flash(f"Foydalanuvchi qo'shildi: {created.username}", "success")
        except (ValidationError, AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return redirect(url_for("users"))

    @app.route("/users/<int:user_id>/role", methods=["POST"], endpoint="update_user_role")
    @role_required(Role.ADMIN)
    def update_user_role(user_id: int):
        try:
            container.user_service.change_role(
                current_user=container.auth_service.current_user(),
                user_id=user_id,
                role=request.form.get("role", ""),
            )
            flash("Foydalanuvchi roli yangilandi.", "success")
        except (ValidationError, AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return redirect(url_for("users"))

    @app.route("/users/<int:user_id>/password", methods=["POST"], endpoint="update_user_password")
    @role_required(Role.ADMIN)
    def update_user_password(user_id: int):
        try:
            container.user_service.change_password(
                current_user=container.auth_service.current_user(),
                user_id=user_id,
                password=request.form.get("password", ""),
            )
            flash("Parol yangilandi.", "success")
        except (ValidationError, AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return redirect(url_for("users"))

    @app.route("/users/<int:user_id>/delete", methods=["POST"], endpoint="delete_user")
    @role_required(Role.ADMIN)
    def delete_user(user_id: int):
        try:
            container.user_service.delete_user(current_user=container.auth_service.current_user(), user_id=user_id)
            flash("Foydalanuvchi o'chirildi.", "success")
        except (ValidationError, AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return redirect(url_for("users"))
