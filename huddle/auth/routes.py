"""Routes for the auth blueprint."""

from flask_wtf.csrf import generate_csrf

from huddle.utils import api_response

from . import bp


@bp.route("/csrf-token", methods=["GET"])
def csrf_token():
    """Issue a CSRF token for the session.

    API clients send it back in the ``X-CSRFToken`` header on every write.
    """
    return api_response({"csrfToken": generate_csrf()})
