from .blocking import block_user as _block_user
from .blocking import unblock_user as _unblock_user
from .friendship import (
    get_blocked_ids as _get_blocked_ids,
    get_friend_ids as _get_friend_ids,
    get_friendship as _get_friendship,
    get_friendship_status as _get_friendship_status,
    get_user_friends as _get_user_friends,
    is_blocked_between as _is_blocked_between,
    remove_friend as _remove_friend,
)
from .requests import (
    accept_friend_request as _accept_friend_request,
    cancel_friend_request as _cancel_friend_request,
    get_received_requests as _get_received_requests,
    get_sent_requests as _get_sent_requests,
    reject_friend_request as _reject_friend_request,
    send_friend_request as _send_friend_request,
)
from .suggestions import FriendGraph, StoreFriendGraph
from .suggestions import suggest_friends as _suggest_friends


class FriendService:
    """Service class for the friendship graph."""

    send_friend_request = staticmethod(_send_friend_request)
    accept_friend_request = staticmethod(_accept_friend_request)
    reject_friend_request = staticmethod(_reject_friend_request)
    cancel_friend_request = staticmethod(_cancel_friend_request)
    remove_friend = staticmethod(_remove_friend)
    block_user = staticmethod(_block_user)
    unblock_user = staticmethod(_unblock_user)
    get_friendship = staticmethod(_get_friendship)
    get_friend_ids = staticmethod(_get_friend_ids)
    get_blocked_ids = staticmethod(_get_blocked_ids)
    is_blocked_between = staticmethod(_is_blocked_between)
    get_friendship_status = staticmethod(_get_friendship_status)
    get_user_friends = staticmethod(_get_user_friends)
    get_received_requests = staticmethod(_get_received_requests)
    get_sent_requests = staticmethod(_get_sent_requests)
    suggest_friends = staticmethod(_suggest_friends)


__all__ = ["FriendGraph", "FriendService", "StoreFriendGraph"]
