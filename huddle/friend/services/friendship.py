"""Friendships, pending-request lookups and block lookups."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from huddle.core.constants import (
    FRIENDSHIP_BLOCKED,
    FRIENDSHIP_FRIENDS,
    FRIENDSHIP_NONE,
    FRIENDSHIP_REQUEST_RECEIVED,
    FRIENDSHIP_REQUEST_SENT,
    STATUS_PENDING,
)
from huddle.errors import NotFoundError
from huddle.store import eq
from huddle.user.services import get_user_map

from ..models import (
    Block,
    FriendEntry,
    FriendRequest,
    Friendship,
    block_id,
    friendship_id,
)

if TYPE_CHECKING:
    from huddle.store import RelationshipStore

logger = logging.getLogger(__name__)


def get_friendship(
    store: RelationshipStore, user_id: str, friend_id: str
) -> Friendship | None:
    """Return the canonical edge between two users, if any."""
    return store.get(Friendship, friendship_id(user_id, friend_id))


def get_user_friendships(store: RelationshipStore, user_id: str) -> list[Friendship]:
    """Every friendship edge the user sits on, from either side."""
    return store.query(Friendship, [eq("userA", user_id)]) + store.query(
        Friendship, [eq("userB", user_id)]
    )


def get_friend_ids(store: RelationshipStore, user_id: str) -> set[str]:
    return {edge.other(user_id) for edge in get_user_friendships(store, user_id)}


def get_user_friends(store: RelationshipStore, user_id: str) -> list[FriendEntry]:
    """Fetch a user's friends, most recent friendship first."""
    edges = get_user_friendships(store, user_id)
    if not edges:
        return []

    users = get_user_map(store, [edge.other(user_id) for edge in edges])
    friends = [
        FriendEntry(
            friendship_id=edge.id,
            user=users[edge.other(user_id)],
            friends_since=edge.created_at,
        )
        for edge in edges
        if edge.other(user_id) in users
    ]
    friends.sort(key=lambda entry: entry.friends_since, reverse=True)
    return friends


def find_pending_request(
    store: RelationshipStore, from_user: str, to_user: str
) -> FriendRequest | None:
    """Return the pending request ``from_user -> to_user``, if one exists."""
    requests = store.query(
        FriendRequest,
        [eq("from", from_user), eq("to", to_user), eq("status", STATUS_PENDING)],
        limit=1,
    )
    return requests[0] if requests else None


def get_pending_requests_between(
    store: RelationshipStore, user_id: str, other_id: str
) -> list[FriendRequest]:
    """Pending requests between two users, in both directions."""
    return [
        request
        for request in (
            find_pending_request(store, user_id, other_id),
            find_pending_request(store, other_id, user_id),
        )
        if request is not None
    ]


def get_block(
    store: RelationshipStore, blocker_id: str, blocked_id: str
) -> Block | None:
    return store.get(Block, block_id(blocker_id, blocked_id))


def is_blocked_between(store: RelationshipStore, user_id: str, other_id: str) -> bool:
    """Check whether either user has blocked the other."""
    return (
        get_block(store, user_id, other_id) is not None
        or get_block(store, other_id, user_id) is not None
    )


def get_blocked_ids(store: RelationshipStore, user_id: str) -> set[str]:
    """Users this user blocked or was blocked by."""
    blocked = {b.blocked_id for b in store.query(Block, [eq("blockerId", user_id)])}
    blocked_by = {b.blocker_id for b in store.query(Block, [eq("blockedId", user_id)])}
    return blocked | blocked_by


def get_friendship_status(store: RelationshipStore, user_id: str, other_id: str) -> str:
    """Describe the relationship between two users from ``user_id``'s side."""
    if user_id == other_id:
        return FRIENDSHIP_NONE
    if is_blocked_between(store, user_id, other_id):
        return FRIENDSHIP_BLOCKED
    if get_friendship(store, user_id, other_id):
        return FRIENDSHIP_FRIENDS
    if find_pending_request(store, user_id, other_id):
        return FRIENDSHIP_REQUEST_SENT
    if find_pending_request(store, other_id, user_id):
        return FRIENDSHIP_REQUEST_RECEIVED
    return FRIENDSHIP_NONE


def remove_friend(store: RelationshipStore, user_id: str, friend_id: str) -> None:
    """Delete the friendship between two users.

    Raises:
        NotFoundError: If the users are not friends.
    """
    friendship = get_friendship(store, user_id, friend_id)
    if friendship is None:
        raise NotFoundError("Friendship not found.")

    store.delete(Friendship, friendship.id)
    logger.info(f"Friendship {friendship.id} removed by {user_id}")
