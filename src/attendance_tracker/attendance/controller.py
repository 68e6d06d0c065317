from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.datetime_utils import now_local, parse_iso_date, parse_month
from ..common.http import login_required, manager_required
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..container import Container
from .derivation import MonthlyStats
from .model import AttendanceRecord, AttendanceWithProfile


def record_to_json(r: AttendanceRecord | None) -> dict | None:
    if r is None:
        return None
    return {
        "id": r.id,
        "user_id": r.user_id,
        "date": r.work_date.isoformat(),
        "status": r.status.value,
        "check_in_time": r.check_in_time.isoformat() if r.check_in_time else None,
        "check_out_time": r.check_out_time.isoformat() if r.check_out_time else None,
        "total_hours": float(r.total_hours) if r.total_hours is not None else None,
    }


def joined_to_json(row: AttendanceWithProfile) -> dict:
    data = record_to_json(row.record)
    data["employee"] = {
        "id": row.employee.id,
        "name": row.employee.name,
        "employee_id": row.employee.employee_id,
        "department": row.employee.department,
    }
    return data


def stats_to_json(stats: MonthlyStats) -> dict:
    return {
        "present": stats.present,
        "absent": stats.absent,
        "late": stats.late,
        "total_hours": float(stats.total_hours),
    }


def parse_status(value: str | None) -> AttendanceStatus | None:
    if not value or value == "all":
        return None
    try:
        return AttendanceStatus(value)
    except ValueError as exc:
        raise ValidationError(f"Unknown status: {value!r}") from exc


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _current_user_id() -> str:
        return str(session["user_id"])

    @app.route("/api/checkin", methods=["POST"], endpoint="api_checkin")
    @login_required
    def checkin():
        record = service.check_in(_current_user_id())
        return jsonify({"success": True, "record": record_to_json(record)}), 201

    @app.route("/api/checkout", methods=["POST"], endpoint="api_checkout")
    @login_required
    def checkout():
        record = service.check_out(_current_user_id())
        return jsonify({"success": True, "record": record_to_json(record)}), 200

    @app.route("/api/me/dashboard", methods=["GET"], endpoint="api_me_dashboard")
    @login_required
    def me_dashboard():
        data = service.employee_dashboard(_current_user_id(), now_local().date())
        return jsonify(
            {
                "today": record_to_json(data.today),
                "monthly": stats_to_json(data.monthly),
                "recent": [record_to_json(r) for r in data.recent],
            }
        )

    @app.route("/api/me/history", methods=["GET"], endpoint="api_me_history")
    @login_required
    def me_history():
        month_s = request.args.get("month")
        month = parse_month(month_s) if month_s else now_local().date()
        history = service.month_history(_current_user_id(), month)
        return jsonify(
            {
                "month": history.month_start.strftime("%Y-%m"),
                "days": [
                    {"date": d.day.isoformat(), "record": record_to_json(d.record)}
                    for d in history.days
                ],
            }
        )

    @app.route("/api/manager/attendance", methods=["GET"], endpoint="api_manager_attendance")
    @manager_required
    def manager_attendance():
        date_s = request.args.get("date")
        on_date = parse_iso_date(date_s) if date_s else now_local().date()
        rows = service.daily_roster(
            on_date,
            search=request.args.get("q", ""),
            status=parse_status(request.args.get("status")),
        )
        return jsonify({"date": on_date.isoformat(), "rows": [joined_to_json(r) for r in rows]})
