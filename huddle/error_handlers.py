from flask import Blueprint, current_app, jsonify
from flask_wtf.csrf import CSRFError

from .errors import AppError, StoreError

error_handlers_bp = Blueprint("error_handlers", __name__)


def _error_response(kind, code, message, status_code):
    body = {"success": False, "error": {"kind": kind, "code": code, "message": message}}
    return jsonify(body), status_code


@error_handlers_bp.app_errorhandler(StoreError)
def handle_store_error(error):
    """Handles document store failures without leaking their details."""
    current_app.logger.error(f"Store Error: {error.__cause__ or error.message}")
    return _error_response(error.kind, error.code, error.message, error.status_code)


@error_handlers_bp.app_errorhandler(AppError)
def handle_app_error(error):
    """Renders any domain error with its stable kind and code."""
    current_app.logger.warning(f"{error.kind} ({error.code}): {error.message}")
    return _error_response(error.kind, error.code, error.message, error.status_code)


@error_handlers_bp.app_errorhandler(404)
def handle_404(e):
    """Handles generic 404 errors for routes that don't exist."""
    return _error_response("NotFound", "RouteNotFound", "Route not found.", 404)


@error_handlers_bp.app_errorhandler(405)
def handle_405(e):
    return _error_response(
        "InvalidArgument", "MethodNotAllowed", "Method not allowed.", 405
    )


@error_handlers_bp.app_errorhandler(500)
def handle_500(e):
    """Handles unexpected server errors."""
    current_app.logger.error(f"Internal Server Error: {e}")
    return _error_response(
        "Internal", "Internal", "An unexpected error occurred.", 500
    )


@error_handlers_bp.app_errorhandler(CSRFError)
def handle_csrf_error(e):
    """Handles CSRF errors, which usually indicate an expired session."""
    current_app.logger.warning(f"CSRF Error: {e.description}")
    return _error_response("Forbidden", "CSRFError", e.description, 400)
