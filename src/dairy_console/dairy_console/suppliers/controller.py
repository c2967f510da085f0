from __future__ import annotations

from flask import Flask, flash, redirect, render_template, request, url_for

from ..core.enums import Role
from ..core.exceptions import ApiError, AuthorizationError, ValidationError
from ..container import Container
from ..users.guards import login_required, role_required


def register(app: Flask, container: Container) -> None:
    @app.route("/suppliers", endpoint="suppliers")
    @login_required
    def suppliers():
        search = request.args.get("q", "")
        items = []
        try:
            items = container.supplier_service.list_suppliers(search=search)
        except ApiError as e:
            flash(str(e), "danger")
        return render_template("suppliers/index.html", suppliers=items, search=search, active_page="suppliers")

    @app.route("/suppliers/new", methods=["GET", "POST"], endpoint="new_supplier")
    @role_required(Role.MANAGER)
    def new_supplier():
        if request.method == "POST":
            try:
                container.supplier_service.create_supplier(
                    current_user=container.auth_service.current_user(),
                    name=request.form.get("name", ""),
                    phone=request.form.get("phone", ""),
                    notes=request.form.get("notes"),
                )
                flash("Yetkazib beruvchi qo'shildi.", "success")
                return redirect(url_for("suppliers"))
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        return render_template("suppliers/form.html", supplier=None, form=request.form, active_page="suppliers")

    @app.route("/suppliers/<int:supplier_id>/edit", methods=["GET", "POST"], endpoint="edit_supplier")
    @role_required(Role.MANAGER)
    def edit_supplier(supplier_id: int):
        if request.method == "POST":
            try:
                container.supplier_service.update_supplier(
                    current_user=container.auth_service.current_user(),
                    supplier_id=supplier_id,
                    name=request.form.get("name", ""),
                    phone=request.form.get("phone", ""),
                    notes=request.form.get("notes"),
                )
                flash("Yetkazib beruvchi yangilandi.", "success")
                return redirect(url_for("suppliers"))
            except (ValidationError, AuthorizationError, ApiError) as e:
                flash(str(e), "danger")

        try:
            supplier = container.supplier_service.get_supplier(supplier_id)
        except ApiError as e:
            flash(str(e), "danger")
            return redirect(url_for("suppliers"))

        return render_template("suppliers/form.html", supplier=supplier, form=request.form, active_page="suppliers")

    @app.route("/suppliers/<int:supplier_id>/delete", methods=["POST"], endpoint="delete_supplier")
    @role_required(Role.MANAGER)
    def delete_supplier(supplier_id: int):
        try:
            container.supplier_service.delete_supplier(
                current_user=container.auth_service.current_user(),
                supplier_id=supplier_id,
            )
            flash("Yetkazib beruvchi o'chirildi.", "success")
        except (AuthorizationError, ApiError) as e:
            flash(str(e), "danger")
        return redirect(url_for("suppliers"))
