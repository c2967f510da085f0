from __future__ import annotations

from functools import wraps

from flask import current_app, flash, jsonify, redirect, render_template, request, url_for

from ..core.enums import Role
from .service import TokenStore, has_permission

STORE_EXTENSION = "dairy_console.store"


def _store() -> TokenStore:
    """The container's token store, attached to the app by create_app."""
    return current_app.extensions[STORE_EXTENSION]


def _wants_json() -> bool:
    return request.path.startswith("/api/")


def _login_redirect(next_url=None):
    if _wants_json():
        return jsonify({"message": "Unauthorized"}), 401
    if next_url is None:
        return redirect(url_for("login"))
    return redirect(url_for("login", next=next_url))


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        store = _store()
        if not store.get_token() or not store.get_user():
            if not _wants_json():
                flash("Davom etish uchun tizimga kiring", "warning")
            return _login_redirect(request.full_path.rstrip("?"))
        return view(*args, **kwargs)

    return wrapper


def role_required(required: Role):
    """Like login_required, plus the role hierarchy check (403 page when too low)."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            store = _store()
            user = store.get_user()
            if not store.get_token() or not user:
                return _login_redirect()

            if not has_permission(user, required):
                if _wants_json():
                    return jsonify({"message": "Forbidden"}), 403
                return render_template("403.html", required_role=required), 403

            return view(*args, **kwargs)

        return wrapper

    return decorator
