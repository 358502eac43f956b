"""Routes for the friend blueprint."""

from flask import current_app, request

from huddle.auth.decorators import current_user_id, login_required
from huddle.errors import ValidationError
from huddle.forms import validate_form
from huddle.store import get_store
from huddle.utils import api_response

from . import bp
from .forms import BlockForm, FriendRequestForm
from .services import FriendService


@bp.route("/", methods=["GET"])
@login_required
def list_friends():
    """List the current user's friends, newest first."""
    friends = FriendService.get_user_friends(get_store(), current_user_id())
    return api_response([entry.to_dict() for entry in friends])


@bp.route("/<string:friend_id>", methods=["DELETE"])
@login_required
def remove_friend(friend_id):
    """Unfriend another user."""
    FriendService.remove_friend(get_store(), current_user_id(), friend_id)
    return api_response(message="Friend removed.")


@bp.route("/status/<string:other_id>", methods=["GET"])
@login_required
def friendship_status(other_id):
    status = FriendService.get_friendship_status(
        get_store(), current_user_id(), other_id
    )
    return api_response({"userId": other_id, "status": status})


@bp.route("/requests", methods=["POST"])
@login_required
def send_request():
    """Send a friend request to another user."""
    form = validate_form(FriendRequestForm())
    friend_request = FriendService.send_friend_request(
        get_store(), current_user_id(), form.to.data, form.message.data
    )
    return api_response(friend_request.to_dict(), "Friend request sent.", 201)


@bp.route("/requests/received", methods=["GET"])
@login_required
def received_requests():
    entries = FriendService.get_received_requests(get_store(), current_user_id())
    return api_response([entry.to_dict() for entry in entries])


@bp.route("/requests/sent", methods=["GET"])
@login_required
def sent_requests():
    entries = FriendService.get_sent_requests(get_store(), current_user_id())
    return api_response([entry.to_dict() for entry in entries])


@bp.route("/requests/<string:request_id>/accept", methods=["POST"])
@login_required
def accept_request(request_id):
    """Accept a friend request addressed to the current user."""
    friendship = FriendService.accept_friend_request(
        get_store(), request_id, current_user_id()
    )
    return api_response(friendship.to_dict(), "Friend request accepted.")


@bp.route("/requests/<string:request_id>/reject", methods=["POST"])
@login_required
def reject_request(request_id):
    FriendService.reject_friend_request(get_store(), request_id, current_user_id())
    return api_response(message="Friend request rejected.")


@bp.route("/requests/<string:request_id>", methods=["DELETE"])
@login_required
def cancel_request(request_id):
    """Withdraw a request the current user sent."""
    FriendService.cancel_friend_request(get_store(), request_id, current_user_id())
    return api_response(message="Friend request cancelled.")


@bp.route("/blocks", methods=["POST"])
@login_required
def block_user():
    form = validate_form(BlockForm())
    block = FriendService.block_user(get_store(), current_user_id(), form.user_id.data)
    current_app.logger.info(f"User {block.blocker_id} blocked {block.blocked_id}")
    return api_response({"blockedId": block.blocked_id}, "User blocked.", 201)


@bp.route("/blocks/<string:user_id>", methods=["DELETE"])
@login_required
def unblock_user(user_id):
    FriendService.unblock_user(get_store(), current_user_id(), user_id)
    return api_response(message="User unblocked.")


@bp.route("/suggestions", methods=["GET"])
@login_required
def suggestions():
    """Suggest friends-of-friends, or new users for users without friends."""
    default_limit = current_app.config["SUGGESTION_LIMIT"]
    try:
        limit = int(request.args.get("limit", default_limit))
    except ValueError as e:
        raise ValidationError("limit must be an integer.") from e

    ranked = FriendService.suggest_friends(get_store(), current_user_id(), limit)
    return api_response([suggestion.to_dict() for suggestion in ranked])
