"""The friend blueprint."""

from flask import Blueprint

bp = Blueprint("friend", __name__, url_prefix="/friends")

from . import routes  # noqa: E402

__all__ = ["routes"]
