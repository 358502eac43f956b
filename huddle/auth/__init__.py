"""The auth blueprint. Token issuance lives with the identity provider."""

from flask import Blueprint

from .decorators import current_user_id, login_required

bp = Blueprint("auth", __name__, url_prefix="/auth")

from . import routes  # noqa: E402

__all__ = ["current_user_id", "login_required", "routes"]
