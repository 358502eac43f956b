"""Decorators for authenticated API routes."""

from functools import wraps

from flask import g, jsonify


def login_required(f=None):
    """Reject the request with 401 unless a user was loaded for the session.

    Usage:
    @login_required
    def protected_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            if g.get("user") is None:
                body = {
                    "success": False,
                    "error": {
                        "kind": "Unauthenticated",
                        "code": "Unauthenticated",
                        "message": "Authentication required.",
                    },
                }
                return jsonify(body), 401
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator


def current_user_id():
    """Id of the user loaded for the current request."""
    return g.user["uid"]
