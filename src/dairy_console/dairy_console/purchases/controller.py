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
            "supplier_id": request.form.get("supplier_id"),
            "date": request.form.get("date", ""),
            "quantity_liters": request.form.get("quantity_liters"),
            "price_per_liter": request.form.get("price_per_liter"),
            "total": request.form.get("total"),
        }

    def _render_form(purchase):
        suppliers = []
        try:
            suppliers = container.supplier_service.list_suppliers()
        except ApiError as e:
            flash(str(e), "danger")
        return render_template(
            "purchases/form.html",
            purchase=purchase,
            suppliers=suppliers,
            form=request.form,
            active_page="milk_purchases",
        )

    @app.route("/milk-purchases", endpoint="milk_purchases")
    @login_required
    def milk_purchases():
        search = request.args.get("q", "")
        items = []
        try:
            items = container.purchase_service.list_purchases(search=search)
        except ApiError as e:
            flash(str(e), "danger")
        return render_template(
            "purchases/index.html",
            purchases=items,
            search=search,
            active_page="milk_purchases",
        )

    @app.route("/milk-purchases/new", methods=["GET", "POST"], endpoint="new_milk_purchase")
    @role_required(Role.MANAGER)
    def new_milk_purchase():
        if request.method == "POST":
            try:
                container.purchase_service.create_purchase(
                    current_user=container.auth_service.current_user(),
                    **_form_fields(),
                )
                flash("Sut xaridi qo'shildi.", "success")
                return redirect(url_for("milk_purchases"))
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")
        return _render_form(None)

    @app.route("/milk-purchases/<int:purchase_id>/edit", methods=["GET", "POST"], endpoint="edit_milk_purchase")
    @role_required(Role.MANAGER)
    def edit_milk_purchase(purchase_id: int):
        if request.method == "POST":
            try:
                container.purchase_service.update_purchase(
                    current_user=container.auth_service.current_user(),
                    purchase_id=purchase_id,
                    **_form_fields(),
                )
                flash("Sut xaridi yangilandi.", "success")
                return redirect(url_for("milk_purchases"))
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        try:
            purchase = container.purchase_service.get_purchase(purchase_id)
        except ApiError as e:
            flash(str(e), "danger")
            return redirect(url_for("milk_purchases"))
        return _render_form(purchase)

    @app.route("/milk-purchases/<int:purchase_id>/delete", methods=["POST"], endpoint="delete_milk_purchase")
    @role_required(Role.MANAGER)
    def delete_milk_purchase(purchase_id: int):
        try:
            container.purchase_service.delete_purchase(
                current_user=container.auth_service.current_user(),
                purchase_id=purchase_id,
            )
            flash("Sut xaridi o'chirildi.", "success")
        except (AuthorizationError, ApiError):
            flash("Xaridni o'chirishda muammo yuz berdi", "danger")
        return redirect(url_for("milk_purchases"))

    @app.route("/milk-purchases/export", endpoint="export_milk_purchases")
    @login_required
    def export_milk_purchases():
        try:
            output = container.purchase_service.export_purchases(search=request.args.get("q", ""))
        except ApiError as e:
            flash(str(e), "danger")
            return redirect(url_for("milk_purchases"))
        return send_file(output, download_name="sut_xaridlari.xlsx", as_attachment=True, mimetype=XLSX_MIMETYPE)
