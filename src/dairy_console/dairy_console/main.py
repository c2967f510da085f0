from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from config import get_settings_module

from .common.datetime_utils import format_date_uz
from .common.formatting import format_currency, format_number, format_quantity, format_volume
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .core.enums import Role
from .core.exceptions import UnauthorizedError
from .core.logging_config import setup_logging
from .users.guards import STORE_EXTENSION
from .users.service import has_permission
from .customers.controller import register as register_customers
from .dashboard.controller import register as register_dashboard
from .products.controller import register as register_products
from .purchases.controller import register as register_purchases
from .sales.controller import register as register_sales
from .sessions.controller import register as register_sessions
from .suppliers.controller import register as register_suppliers
from .users.controller import register as register_users

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    setup_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    api_config = getattr(settings, "API_CONFIG")
    logger.info("settings=%s api=%s", settings_module, api_config.get("base_url"))

    if container is None:
        container = build_container(api_config=api_config)
    app.extensions[STORE_EXTENSION] = container.store

    _register_template_helpers(app, container)
    _register_error_handlers(app, container)

    register_users(app, container)
    register_dashboard(app, container)
    register_suppliers(app, container)
    register_customers(app, container)
    register_products(app, container)
    register_purchases(app, container)
    register_sales(app, container)
    register_sessions(app, container)

    return app


def _register_template_helpers(app: Flask, container: Container) -> None:
    app.jinja_env.filters["currency"] = format_currency
    app.jinja_env.filters["volume"] = format_volume
    app.jinja_env.filters["number"] = format_number
    app.jinja_env.filters["quantity"] = format_quantity
    app.jinja_env.filters["date_uz"] = lambda value: format_date_uz(value) if value else "-"

    @app.context_processor
    def inject_user():
        user = container.auth_service.current_user()
        return {
            "current_user": user,
            "can_edit": has_permission(user, Role.MANAGER),
            "is_admin": has_permission(user, Role.ADMIN),
            "Role": Role,
        }


def _register_error_handlers(app: Flask, container: Container) -> None:
    @app.errorhandler(UnauthorizedError)
    def handle_unauthorized(e: UnauthorizedError):
        logger.info("Backend rejected the stored token (HTTP %s); signing out", e.status_code)
        container.store.clear()
        if request.path.startswith("/api/"):
            return jsonify({"message": "Unauthorized"}), 401
        flash("Sessiya tugadi. Qaytadan kiring.", "warning")
        return redirect(url_for("login"))

    @app.errorhandler(404)
    def not_found(e):
        return render_template("404.html"), 404

    @app.errorhandler(500)
    def server_error(e):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return render_template("500.html"), 500
