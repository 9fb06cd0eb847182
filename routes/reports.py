import io

from flask import Blueprint, request, jsonify, current_app, send_file

from services.reporting.errors import ReportGenerationError, ReportLoadError
from services.reports import generate_and_save

reports_bp = Blueprint('reports', __name__, url_prefix='/api/reports')


def _flag(name):
    return request.args.get(name, "").strip().lower() in ("1", "true", "yes", "on")


@reports_bp.route("/pdf", methods=["POST"])
def render_report_pdf():
    """
    Render the posted report JSON to a PDF download.

    Query flags:
        save=1   submit the report to the saved-reports API first
        store=1  also write the PDF to the storage backend
    """
    payload = request.get_json(silent=True)
    if payload is None:
        return jsonify({"error": "Request body must be a JSON report"}), 400

    try:
        result = generate_and_save(payload, save_remote=_flag("save"), store=_flag("store"))
    except ReportLoadError as e:
        return jsonify({"error": str(e)}), 400
    except ReportGenerationError as e:
        current_app.logger.error(f"[Reports] PDF generation failed: {e}")
        return jsonify({"error": "Error generating the PDF"}), 500

    response = send_file(
        io.BytesIO(result.pdf_bytes),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=result.filename,
    )
    if result.report_id is not None:
        response.headers["X-Report-Id"] = str(result.report_id)
    if result.storage_key:
        response.headers["X-Storage-Key"] = result.storage_key
    return response
