from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, send_file, url_for

from ..common.export import XLSX_MIMETYPE
from ..core.enums import Role
from ..core.exceptions import ApiError, AuthorizationError, ValidationError
from ..container import Container
from ..users.guards import login_required, role_required


def register(app: Flask, container: Container) -> None:
    def _form_fields() -> dict:
        return {
            "customer_id": request.form.get("customer_id"),
            "product_id": request.form.get("product_id"),
            "date": request.form.get("date", ""),
            "quantity": request.form.get("quantity"),
            "price_per_unit": request.form.get("price_per_unit"),
            "total": request.form.get("total"),
        }

    def _render_form(sale):
        customers, products = [], []
        try:
            customers = container.customer_service.list_customers()
            products = container.product_service.list_products()
        except ApiError as e:
            flash(str(e), "danger")
        return render_template(
            "sales/form.html",
            sale=sale,
            customers=customers,
            products=products,
            form=request.form,
            active_page="sales",
        )

    @app.route("/sales", endpoint="sales")
    @login_required
    def sales():
        search = request.args.get("q", "")
        items = []
        try:
            items = container.sale_service.list_sales(search=search)
        except ApiError as e:
            flash(str(e), "danger")
        return render_template("sales/index.html", sales=items, search=search, active_page="sales")

    @app.route("/sales/new", methods=["GET", "POST"], endpoint="new_sale")
    @role_required(Role.MANAGER)
    def new_sale():
        if request.method == "POST":
            try:
                container.sale_service.create_sale(current_user=container.auth_service.current_user(), **_form_fields())
                flash("Sotuv qo'shildi.", "success")
                return redirect(url_for("sales"))
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")
        return _render_form(None)

    @app.route("/sales/<int:sale_id>/edit", methods=["GET", "POST"], endpoint="edit_sale")
    @role_required(Role.MANAGER)
    def edit_sale(sale_id: int):
        if request.method == "POST":
            try:
                container.sale_service.update_sale(
                    current_user=container.auth_service.current_user(),
                    sale_id=sale_id,
                    **_form_fields(),
                )
                flash("Sotuv yangilandi.", "success")
                return redirect(url_for("sales"))
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        try:
            sale = container.sale_service.get_sale(sale_id)
        except ApiError as e:
            flash(str(e), "danger")
            return redirect(url_for("sales"))
        return _render_form(sale)

    @app.route("/sales/<int:sale_id>/delete", methods=["POST"], endpoint="delete_sale")
    @role_required(Role.MANAGER)
    def delete_sale(sale_id: int):
        try:
            container.sale_service.delete_sale(current_user=container.auth_service.current_user(), sale_id=sale_id)
            flash("Sotuv o'chirildi.", "success")
        except (AuthorizationError, ApiError):
            flash("Sotuvni o'chirishda xatolik yuz berdi", "danger")
        return redirect(url_for("sales"))

    @app.route("/sales/export", endpoint="export_sales")
    @login_required
    def export_sales():
        try:
            output = container.sale_service.export_sales(search=request.args.get("q", ""))
        except ApiError as e:
            flash(str(e), "danger")
            return redirect(url_for("sales"))
        return send_file(output, download_name="sotuvlar.xlsx", as_attachment=True, mimetype=XLSX_MIMETYPE)
