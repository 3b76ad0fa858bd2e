"""Error handlers for the application.

Every failure leaves the app as ``{"error", "statusCode", "timestamp"}``.
"""
import datetime

from flask import jsonify
from werkzeug.exceptions import HTTPException

from coursehub.core.errors import ApiError


def error_envelope(message: str, status_code: int):
    """Build the JSON error response tuple."""
    body = {
        "error": message,
        "statusCode": status_code,
        "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(timespec="milliseconds"),
    }
    return jsonify(body), status_code


def register_error_handlers(app):
    """Register error handlers with the Flask app."""

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError):
        """Handle failures raised by guards and services."""
        if error.status_code >= 500:
            app.logger.error(f"{type(error).__name__}: {error.message}", exc_info=True)
        else:
            app.logger.warning(f"{type(error).__name__} ({error.status_code}): {error.message}")
        return error_envelope(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        """Handle routing and protocol errors (404, 405, 413, ...)."""
        status_code = error.code or 500
        app.logger.warning(f"HTTP {status_code}: {error.description}")
        return error_envelope(error.name, status_code)

    @app.errorhandler(Exception)
    def handle_exception(error):
        """Handle uncaught exceptions."""
        # ALWAYS log the full error - the client only sees a generic message
        app.logger.error(f"Unhandled exception: {error}", exc_info=True)
        return error_envelope("Internal Server Error", 500)
