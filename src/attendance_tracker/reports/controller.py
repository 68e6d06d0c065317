from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import error_response, manager_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/manager/report.csv", methods=["GET"], endpoint="api_manager_report_csv")
    @manager_required
    def report_csv():
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        if not start_s or not end_s:
            return error_response("Missing start/end parameters", 400)

        export = container.report_service.export_csv(start=parse_iso_date(start_s), end=parse_iso_date(end_s))
        return app.response_class(
            export.content,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={export.filename}"},
        )
