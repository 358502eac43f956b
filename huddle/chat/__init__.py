"""The chat blueprint."""

from flask import Blueprint

bp = Blueprint("chat", __name__, url_prefix="/chats")

from . import routes  # noqa: E402

__all__ = ["routes"]
