import logging
import json
import uuid
import sys

from flask import request, has_request_context, g

from utils.timestamps import utc_now

# Structured fields the report engine attaches with `extra=`
REPORT_FIELDS = ("case_number", "photo_count", "page_count", "report_id")


class JSONFormatter(logging.Formatter):
    """
    One JSON object per log line.

    Report fields passed via `extra=` are lifted to top-level keys; inside a
    Flask request the method, path and request_id are added too.
    """
    def format(self, record):
        entry = {
            "timestamp": utc_now().isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "lineno": record.lineno,
        }

        for key in REPORT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        if has_request_context():
            entry["method"] = request.method
            entry["path"] = request.path
            entry["request_id"] = getattr(g, "request_id", None)

        return json.dumps(entry, default=str)


def configure_logging(level="INFO"):
    """Route every logger through one JSON handler on stdout (CLI and workers)."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)
    return handler


def setup_logger(app):
    """
    JSON logging for the Flask app and the report engine it drives.

    Each request is tagged with the caller's X-Request-Id (or a fresh uuid),
    which is echoed back on the response.
    """
    from config import LOG_LEVEL

    handler = configure_logging(LOG_LEVEL)
    logging.getLogger('werkzeug').handlers = [handler]

    app.logger.handlers = [handler]
    app.logger.setLevel(LOG_LEVEL)
    app.logger.propagate = False

    # Under gunicorn, share its error log handlers
    gunicorn_error = logging.getLogger('gunicorn.error')
    if gunicorn_error.handlers:
        app.logger.handlers = gunicorn_error.handlers
        app.logger.setLevel(gunicorn_error.level)

    @app.before_request
    def tag_request():
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())

    @app.after_request
    def echo_request_id(response):
        request_id = getattr(g, "request_id", None)
        if request_id:
            response.headers["X-Request-Id"] = request_id
        return response

    app.logger.debug("JSON logging configured")
