from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.constants import CUSTOMER_TYPES
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthorizationError, ValidationError
from ..container import Container
from ..users.guards import login_required, role_required


def register(app: Flask, container: Container) -> None:
    def _form_fields() -> dict:
        return {
            "name": request.form.get("name", ""),
            "type": request.form.get("type", ""),
            "phone": request.form.get("phone", ""),
            "notes": request.form.get("notes"),
        }

    @app.route("/customers", endpoint="customers")
    @login_required
    def customers():
        search = request.args.get("q", "")
        items = []
        try:
            items = container.customer_service.list_customers(search=search)
        except ApiError as e:
            flash(str(e), "danger")
        return render_template("customers/index.html", customers=items, search=search, active_page="customers")

    @app.route("/customers/new", methods=["GET", "POST"], endpoint="new_customer")
    @role_required(Role.MANAGER)
    def new_customer():
        if request.method == "POST":
            try:
                container.customer_service.create_customer(
                    current_user=container.auth_service.current_user(),
                    **_form_fields(),
                )
                flash("Mijoz qo'shildi.", "success")
                return redirect(url_for("customers"))
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        return render_template(
            "customers/form.html",
            customer=None,
            form=request.form,
            customer_types=CUSTOMER_TYPES,
            active_page="customers",
        )

    @app.route("/customers/<int:customer_id>/edit", methods=["GET", "POST"], endpoint="edit_customer")
    @role_required(Role.MANAGER)
    def edit_customer(customer_id: int):
        if request.method == "POST":
            try:
                container.customer_service.update_customer(
                    current_user=container.auth_service.current_user(),
                    customer_id=customer_id,
                    **_form_fields(),
                )
                flash("Mijoz yangilandi.", "success")
                return redirect(url_for("customers"))
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        try:
            customer = container.customer_service.get_customer(customer_id)
        except ApiError as e:
            flash(str(e), "danger")
            return redirect(url_for("customers"))

        return render_template(
            "customers/form.html",
            customer=customer,
            form=request.form,
            customer_types=CUSTOMER_TYPES,
            active_page="customers",
        )

    @app.route("/customers/<int:customer_id>/delete", methods=["POST"], endpoint="delete_customer")
    @role_required(Role.MANAGER)
    def delete_customer(customer_id: int):
        try:
            container.customer_service.delete_customer(
                current_user=container.auth_service.current_user(),
                customer_id=customer_id,
            )
            flash("Mijoz o'chirildi.", "success")
        except (AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return redirect(url_for("customers"))
