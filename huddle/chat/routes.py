"""Routes for the chat blueprint."""

from flask import current_app

from huddle.auth.decorators import current_user_id, login_required
from huddle.forms import validate_form
from huddle.store import get_store
from huddle.utils import api_response

from . import bp
from .forms import PinForm
from .permissions import ensure_can_pin, ensure_participant
from .services import (
    get_chat,
    get_or_create_peer_chat,
    pin_message,
    unpin_message,
)


@bp.route("/peer/<string:other_id>", methods=["POST"])
@login_required
def open_peer_chat(other_id):
    """Open the one-to-one chat with another user."""
    chat = get_or_create_peer_chat(get_store(), current_user_id(), other_id)
    return api_response(chat.to_dict())


@bp.route("/<string:chat_id>", methods=["GET"])
@login_required
def view_chat(chat_id):
    store = get_store()
    chat = get_chat(store, chat_id)
    ensure_participant(store, chat, current_user_id())
    return api_response(chat.to_dict())


@bp.route("/<string:chat_id>/pins", methods=["GET"])
@login_required
def pinned_messages(chat_id):
    """Pinned messages of a chat, oldest first."""
    store = get_store()
    chat = get_chat(store, chat_id)
    ensure_participant(store, chat, current_user_id())
    return api_response([pin.to_dict() for pin in chat.pinned_content])


@bp.route("/<string:chat_id>/pins", methods=["POST"])
@login_required
def pin(chat_id):
    """Pin a message. The oldest pin is dropped once three are pinned."""
    form = validate_form(PinForm())
    store = get_store()
    user_id = current_user_id()
    ensure_can_pin(store, get_chat(store, chat_id), user_id)

    pinned = pin_message(store, chat_id, form.message_id.data, pinned_by=user_id)
    current_app.logger.info(f"{user_id} pinned {form.message_id.data} in {chat_id}")
    return api_response([entry.to_dict() for entry in pinned], "Message pinned.")


@bp.route("/<string:chat_id>/pins/<string:message_id>", methods=["DELETE"])
@login_required
def unpin(chat_id, message_id):
    store = get_store()
    ensure_can_pin(store, get_chat(store, chat_id), current_user_id())
    pinned = unpin_message(store, chat_id, message_id)
    return api_response([entry.to_dict() for entry in pinned], "Message unpinned.")
