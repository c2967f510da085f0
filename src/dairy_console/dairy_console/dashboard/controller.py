from __future__ import annotations

from flask import Flask, flash, jsonify, render_template, request

from ..common.datetime_utils import end_of_month, start_of_month, today_local
from ..core.enums import Period
from ..core.exceptions import ApiError, ValidationError
from ..container import Container
from ..users.guards import login_required
from .model import DateRange
from .service import chart_payload, parse_period, quick_payload, range_label


def register(app: Flask, container: Container) -> None:
    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        service = container.dashboard_service
        try:
            date_range = service.page_range(
                from_value=request.args.get("from", ""),
                to_value=request.args.get("to", ""),
                period=request.args.get("period", ""),
            )
        except ValidationError as e:
            flash(str(e), "danger")
            today = today_local()
            date_range = DateRange(start_of_month(today), end_of_month(today))

        data = None
        try:
            data = service.get_period(date_range)
        except ApiError as e:
            flash(str(e), "danger")

        all_time = service.get_all_time()

        return render_template(
            "dashboard.html",
            data=data,
            all_time=all_time,
            date_range=date_range,
            range_label=range_label(date_range),
            charts=chart_payload(data, all_time) if data else {},
            periods=list(Period),
            active_page="dashboard",
        )

    @app.route("/dashboard/summary", endpoint="dashboard_summary")
    @login_required
    def dashboard_summary():
        summary = None
        try:
            summary = container.dashboard_service.get_summary()
        except ApiError as e:
            flash(str(e), "danger")
        return render_template("dashboard_summary.html", summary=summary, active_page="dashboard")

    @app.route("/api/dashboard/quick/<period>", endpoint="dashboard_quick")
    @login_required
    def dashboard_quick(period: str):
        try:
            selected = parse_period(period)
            _, data = container.dashboard_service.get_quick(selected)
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except ApiError as e:
            return jsonify({"message": e.message}), e.status_code or 502
        return jsonify(quick_payload(selected, data))
