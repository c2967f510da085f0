from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.constants import PRODUCT_UNITS
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthorizationError, ValidationError
from ..container import Container
from ..users.guards import login_required, role_required


def register(app: Flask, container: Container) -> None:
    @app.route("/products", endpoint="products")
    @login_required
    def products():
        search = request.args.get("q", "")
        items = []
        try:
            items = container.product_service.list_products(search=search)
        except ApiError as e:
            flash(str(e), "danger")
        return render_template("products/index.html", products=items, search=search, active_page="products")

    @app.route("/products/new", methods=["GET", "POST"], endpoint="new_product")
    @role_required(Role.MANAGER)
    def new_product():
        if request.method == "POST":
            try:
                container.product_service.create_product(
                    current_user=container.auth_service.current_user(),
                    name=request.form.get("name", ""),
                    unit=request.form.get("unit", ""),
                    price_per_unit=request.form.get("price_per_unit"),
                )
                flash("Mahsulot qo'shildi.", "success")
                return redirect(url_for("products"))
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        return render_template(
            "products/form.html",
            product=None,
            form=request.form,
            units=PRODUCT_UNITS,
            active_page="products",
        )

    @app.route("/products/<int:product_id>/edit", methods=["GET", "POST"], endpoint="edit_product")
    @role_required(Role.MANAGER)
    def edit_product(product_id: int):
        if request.method == "POST":
            try:
                container.product_service.update_product(
                    current_user=container.auth_service.current_user(),
                    product_id=product_id,
                    name=request.form.get("name", ""),
                    unit=request.form.get("unit", ""),
                    price_per_unit=request.form.get("price_per_unit"),
                )
                flash("Mahsulot yangilandi.", "success")
                return redirect(url_for("products"))
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        try:
            product = container.product_service.get_product(product_id)
        except ApiError as e:
            flash(str(e), "danger")
            return redirect(url_for("products"))

        return render_template(
            "products/form.html",
            product=product,
            form=request.form,
            units=PRODUCT_UNITS,
            active_page="products",
        )

    @app.route("/products/<int:product_id>/delete", methods=["POST"], endpoint="delete_product")
    @role_required(Role.MANAGER)
    def delete_product(product_id: int):
        try:
            container.product_service.delete_product(
                current_user=container.auth_service.current_user(),
                product_id=product_id,
            )
            flash("Mahsulot o'chirildi.", "success")
        except (AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return redirect(url_for("products"))
