from __future__ import annotations

from flask import Flask, jsonify, request

from ..attendance.reconciler import RosterReconciliation
from ..common.datetime_utils import now_local, parse_iso_date
from ..common.http import manager_required
from ..container import Container


def reconciliation_to_json(r: RosterReconciliation) -> dict:
    return {
        "total_employees": r.total_employees,
        "present": r.present_count,
        "late": r.late_count,
        "absent": r.absent_count,
        "absent_employees": [
            {"id": e.id, "name": e.name, "employee_id": e.employee_id, "department": e.department}
            for e in r.absent_employees
        ],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/manager/dashboard", methods=["GET"], endpoint="api_manager_dashboard")
    @manager_required
    def manager_dashboard():
        date_s = request.args.get("date")
        today = parse_iso_date(date_s) if date_s else now_local().date()
        data = container.dashboard_service.manager_dashboard(today)
        return jsonify(
            {
                "date": data.day.isoformat(),
                "stats": reconciliation_to_json(data.reconciliation),
                "weekly": [
                    {"date": p.day.isoformat(), "day": p.label, "present": p.present, "absent": p.absent, "late": p.late}
                    for p in data.weekly_trend
                ],
            }
        )
