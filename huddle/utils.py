"""Utility functions for the application."""

from flask import jsonify

from .core.types import APIResponse


def api_response(data=None, message="", status_code=200):
    """Wrap a payload in the standard API envelope."""
    body: APIResponse = {"success": True, "message": message, "data": data}
    return jsonify(body), status_code
