import io
from datetime import datetime
from decimal import Decimal

import pandas as pd
from flask import Blueprint, request, jsonify, send_file

from reports.report_service import ReportService, default_date_range
from store.record_store import get_record_store
from src.exceptions import ValidationError, error_response
from src.logger import get_logger

bp = Blueprint("reports", __name__)
logger = get_logger("ReportRoutes")

EXPORTABLE = ("sales", "gst", "stock", "outstanding")


def _failed(e):
    body, status = error_response(e)
    if status == 500:
        logger.exception("Report request failed: %s", str(e))
    return jsonify(body), status


def _date_range():
    default_from, default_to = default_date_range()
    date_from = request.args.get("date_from") or default_from
    date_to = request.args.get("date_to") or default_to
    for value in (date_from, date_to):
        try:
            datetime.strptime(value, "%Y-%m-%d")
        except ValueError:
            raise ValidationError(f"Invalid date '{value}', use YYYY-MM-DD")
    return date_from, date_to


def _build(kind):
    store = get_record_store()
    if kind == "stock":
        return ReportService.generate_stock_report(store)
    date_from, date_to = _date_range()
    if kind == "sales":
        return ReportService.generate_sales_report(store, date_from, date_to)
    if kind == "gst":
        return ReportService.generate_gst_report(store, date_from, date_to)
    if kind == "outstanding":
        return ReportService.generate_outstanding_report(store, date_from, date_to)
    raise ValidationError(f"Unknown report '{kind}'")


@bp.route("/sales", methods=["GET"])
def get_sales_report():
    try:
        return jsonify(_build("sales")), 200
    except Exception as e:
        return _failed(e)

@bp.route("/gst", methods=["GET"])
def get_gst_report():
    try:
        return jsonify(_build("gst")), 200
    except Exception as e:
        return _failed(e)

@bp.route("/stock", methods=["GET"])
def get_stock_report():
    try:
        return jsonify(_build("stock")), 200
    except Exception as e:
        return _failed(e)

@bp.route("/outstanding", methods=["GET"])
def get_outstanding_report():
    try:
        return jsonify(_build("outstanding")), 200
    except Exception as e:
        return _failed(e)

@bp.route("/dashboard", methods=["GET"])
def get_dashboard_report():
    try:
        report = ReportService.generate_dashboard_report(
            get_record_store(),
            profit_basis=request.args.get("profit_basis", "default_gst"),
        )
        return jsonify(report), 200
    except Exception as e:
        return _failed(e)


@bp.route("/<kind>/export", methods=["GET"])
def export_report(kind):
    try:
        if kind not in EXPORTABLE:
            raise ValidationError(f"Report '{kind}' cannot be exported")
        export_format = request.args.get("format", "csv")
        if export_format not in ("csv", "xlsx"):
            raise ValidationError("format must be csv or xlsx")

        report = _build(kind)
        rows = [
            {k: float(v) if isinstance(v, Decimal) else v for k, v in row.items()}
            for row in report["rows"]
        ]
        df = pd.DataFrame(rows)
        filename = f"{kind}_report_{datetime.now().strftime('%Y%m%d_%H%M%S')}.{export_format}"

        if export_format == "xlsx":
            output = io.BytesIO()
            with pd.ExcelWriter(output, engine="openpyxl") as writer:
                df.to_excel(writer, index=False, sheet_name=report["report_name"][:31])
            output.seek(0)
            return send_file(
                output,
                mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                as_attachment=True,
                download_name=filename,
            )

        output = io.StringIO()
        df.to_csv(output, index=False)
        return send_file(
            io.BytesIO(output.getvalue().encode("utf-8")),
            mimetype="text/csv",
            as_attachment=True,
            download_name=filename,
        )
    except Exception as e:
        return _failed(e)
