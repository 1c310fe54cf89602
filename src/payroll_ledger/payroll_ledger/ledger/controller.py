from __future__ import annotations

from datetime import date, datetime

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import NoUsableRecordsError, ValidationError
from ..container import Container
from ..export.exporter import to_csv, to_xlsx_bytes
from ..ingestion.model import ColumnMapping
from ..payroll.model import ManagerEdit, PayrollResult, ShiftFilter


XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    def _parse_date(value) -> date | None:
        if not value:
            return None
        try:
            return parse_iso_date(str(value))
        except ValueError:
            raise ValidationError(f"Invalid date (YYYY-MM-DD): {value}")

    def _parse_filter(data: dict | None) -> ShiftFilter | None:
        if not data:
            return None
        if not isinstance(data, dict):
            raise ValidationError("filters must be an object")
        month = data.get("month")
        if month:
            try:
                if isinstance(month, str):
                    parsed = datetime.strptime(month, "%Y-%m")
                    month = (parsed.year, parsed.month)
                else:
                    month = (int(month[0]), int(month[1]))
            except (TypeError, ValueError, IndexError):
                raise ValidationError(f"Invalid month (YYYY-MM): {month}")
        for key in ("employee", "search"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise ValidationError(f"filters.{key} must be a string")
        return ShiftFilter(
            employee=data.get("employee") or None,
            month=month or None,
            search=data.get("search") or None,
            start=_parse_date(data.get("start")),
            end=_parse_date(data.get("end")),
        )

    def _build_result(payload: dict) -> PayrollResult:
        rows = payload.get("rows")
        if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
            raise ValidationError("rows must be a list of objects")
        mapping_data = payload.get("mapping")
        if mapping_data and not isinstance(mapping_data, dict):
            raise ValidationError("mapping must be an object")
        mapping = ColumnMapping.from_dict(mapping_data) if mapping_data else container.default_mapping
        try:
            edits = payload.get("edits") or []
            if not isinstance(edits, list):
                raise ValidationError("edits must be a list")
            edits = [ManagerEdit.from_dict(e) for e in edits]
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Invalid edit: {e}")

        return container.ledger_service.build_ledger(
            rows,
            mapping,
            edits=edits,
            shift_filter=_parse_filter(payload.get("filters")),
            today=_parse_date(payload.get("today")),
        )

    def _handle(build_response):
        payload = request.get_json(silent=True) or {}
        try:
            if not isinstance(payload, dict):
                raise ValidationError("request body must be a JSON object")
            return build_response(_build_result(payload))
        except NoUsableRecordsError as e:
            preview = [entry.to_dict() for entry in e.cleansing_log[: container.cleansing_preview]]
            return jsonify({"error": str(e), "cleansing_log": preview}), 422
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400

    def _attachment(body: bytes, *, mimetype: str, filename: str):
        return app.response_class(
            body,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _filename(result: PayrollResult, ext: str) -> str:
        if not result.date_range:
            return f"payroll_ledger.{ext}"
        start = result.date_range.start.strftime("%Y%m%d")
        end = result.date_range.end.strftime("%Y%m%d")
        return f"payroll_ledger_{start}_{end}.{ext}"

    @app.route("/api/payroll", methods=["POST"], endpoint="payroll_ledger")
    def payroll_ledger():
        return _handle(lambda result: jsonify(result.to_dict()))

    @app.route("/api/payroll/export.csv", methods=["POST"], endpoint="payroll_export_csv")
    def payroll_export_csv():
        return _handle(
            lambda result: _attachment(
                to_csv(result).encode("utf-8-sig"),
                mimetype="text/csv",
                filename=_filename(result, "csv"),
            )
        )

    @app.route("/api/payroll/export.xlsx", methods=["POST"], endpoint="payroll_export_xlsx")
    def payroll_export_xlsx():
        return _handle(
            lambda result: _attachment(
                to_xlsx_bytes(result),
                mimetype=XLSX_MIMETYPE,
                filename=_filename(result, "xlsx"),
            )
        )

    @app.route("/api/payroll/audit", methods=["POST"], endpoint="payroll_audit")
    def payroll_audit():
        return _handle(
            lambda result: jsonify(
                {
                    "context": container.audit_service.build_context(result),
                    "report": container.audit_service.generate_report(result),
                }
            )
        )

    @app.route("/api/payroll/rules", methods=["GET"], endpoint="payroll_rules")
    def payroll_rules():
        return jsonify({"rules": container.rules.to_dict(), "mapping": container.default_mapping.to_dict()})
