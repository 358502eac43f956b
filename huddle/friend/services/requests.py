"""Friend request state machine: pending -> accepted | rejected | cancelled."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from huddle.core.constants import FRIEND_REQUEST_MESSAGE_MAX_LENGTH, STATUS_PENDING
from huddle.core.types import utcnow
from huddle.errors import (
    AlreadyFriends,
    AlreadyProcessedError,
    Blocked,
    ForbiddenError,
    MessageTooLong,
    NotFoundError,
    RequestExists,
    ReverseRequestExists,
    SelfRequest,
)
from huddle.store import Delete, Put, eq
from huddle.user.services import get_user_map, require_users

from ..models import FriendRequest, Friendship, RequestEntry
from .friendship import find_pending_request, get_friendship, is_blocked_between

if TYPE_CHECKING:
    from huddle.store import RelationshipStore

logger = logging.getLogger(__name__)


def send_friend_request(
    store: RelationshipStore,
    from_user: str,
    to_user: str,
    message: str | None = None,
) -> FriendRequest:
    """Create a pending friend request ``from_user -> to_user``.

    Raises:
        SelfRequest: If both ids are the same user.
        MessageTooLong: If the message exceeds 300 characters.
        NotFoundError: If either user does not exist.
        Blocked: If either user has blocked the other.
        AlreadyFriends: If the users are already friends.
        RequestExists: If the same request is already pending.
        ReverseRequestExists: If the other user already asked first.
    """
    if from_user == to_user:
        raise SelfRequest("Cannot send friend request to yourself.")
    if message and len(message) > FRIEND_REQUEST_MESSAGE_MAX_LENGTH:
        raise MessageTooLong()

    require_users(store, [from_user, to_user])

    if is_blocked_between(store, from_user, to_user):
        raise Blocked("You cannot send a friend request to this user.")
    if get_friendship(store, from_user, to_user):
        raise AlreadyFriends()
    if find_pending_request(store, from_user, to_user):
        raise RequestExists()
    # Accepting the reverse request is the only way to connect a crossing pair
    if find_pending_request(store, to_user, from_user):
        raise ReverseRequestExists()

    request = FriendRequest(
        id=store.new_id(FriendRequest),
        from_user=from_user,
        to_user=to_user,
        message=message or None,
    )
    store.put(request)
    logger.info(f"Friend request {request.id} sent from {from_user} to {to_user}")
    return request


def _get_request(store: RelationshipStore, request_id: str) -> FriendRequest:
    request = store.get(FriendRequest, request_id)
    if request is None:
        raise NotFoundError("Friend request not found.")
    return request


def accept_friend_request(
    store: RelationshipStore, request_id: str, acting_user: str
) -> Friendship:
    """Accept a request, turning it into the canonical friendship edge.

    The request deletion and the friendship creation commit in one batch.
    """
    request = _get_request(store, request_id)
    if request.to_user != acting_user:
        raise ForbiddenError("You can only accept requests sent to you.")
    if not request.is_pending:
        raise AlreadyProcessedError()

    operations = [Delete(FriendRequest, request.id)]

    friendship = get_friendship(store, request.from_user, request.to_user)
    if friendship is None:
        friendship = Friendship.between(request.from_user, request.to_user)
        operations.append(Put(friendship))

    # A crossing request written concurrently would otherwise linger forever
    reverse = find_pending_request(store, request.to_user, request.from_user)
    if reverse is not None:
        operations.append(Delete(FriendRequest, reverse.id))

    store.atomic_batch(operations)
    logger.info(f"Friend request {request.id} accepted; friendship {friendship.id}")
    return friendship


def reject_friend_request(
    store: RelationshipStore, request_id: str, acting_user: str
) -> FriendRequest:
    """Reject a request addressed to ``acting_user``; the request is deleted."""
    request = _get_request(store, request_id)
    if request.to_user != acting_user:
        raise ForbiddenError("You can only reject requests sent to you.")
    if not request.is_pending:
        raise AlreadyProcessedError()

    store.delete(FriendRequest, request.id)
    logger.info(f"Friend request {request.id} rejected by {acting_user}")
    request.updated_at = utcnow()
    return request


def cancel_friend_request(
    store: RelationshipStore, request_id: str, acting_user: str
) -> FriendRequest:
    """Withdraw a request sent by ``acting_user``; the request is deleted."""
    request = _get_request(store, request_id)
    if request.from_user != acting_user:
        raise ForbiddenError("You can only cancel requests you sent.")
    if not request.is_pending:
        raise AlreadyProcessedError()

    store.delete(FriendRequest, request.id)
    logger.info(f"Friend request {request.id} cancelled by {acting_user}")
    request.updated_at = utcnow()
    return request


def _join_requests(
    store: RelationshipStore, requests: list[FriendRequest], other_side: str
) -> list[RequestEntry]:
    """Attach the user on ``other_side`` ("from" or "to") to each request."""

    def other_id(request: FriendRequest) -> str:
        return request.from_user if other_side == "from" else request.to_user

    users = get_user_map(store, [other_id(r) for r in requests])
    entries = [
        RequestEntry(request=r, user=users[other_id(r)])
        for r in requests
        if other_id(r) in users
    ]
    entries.sort(key=lambda entry: entry.request.created_at, reverse=True)
    return entries


def get_received_requests(store: RelationshipStore, user_id: str) -> list[RequestEntry]:
    """Fetch pending friend requests where the user is the recipient."""
    requests = store.query(
        FriendRequest, [eq("to", user_id), eq("status", STATUS_PENDING)]
    )
    return _join_requests(store, requests, "from")


def get_sent_requests(store: RelationshipStore, user_id: str) -> list[RequestEntry]:
    """Fetch pending friend requests where the user is the sender."""
    requests = store.query(
        FriendRequest, [eq("from", user_id), eq("status", STATUS_PENDING)]
    )
    return _join_requests(store, requests, "to")
