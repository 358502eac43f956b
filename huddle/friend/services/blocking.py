"""Blocking and unblocking users."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from huddle.errors import AlreadyBlocked, NotFoundError, SelfRequest
from huddle.store import Delete, Put
from huddle.user.services import require_user

from ..models import Block, FriendRequest, Friendship, block_id
from .friendship import get_block, get_friendship, get_pending_requests_between

if TYPE_CHECKING:
    from huddle.store import RelationshipStore

logger = logging.getLogger(__name__)


def block_user(store: RelationshipStore, blocker_id: str, blocked_id: str) -> Block:
    """Block a user, severing the friendship and any pending requests.

    The block, the friendship deletion and the request deletions commit
    together.
    """
    if blocker_id == blocked_id:
        raise SelfRequest("You cannot block yourself.")
    require_user(store, blocked_id)
    if get_block(store, blocker_id, blocked_id):
        raise AlreadyBlocked()

    block = Block(
        id=block_id(blocker_id, blocked_id),
        blocker_id=blocker_id,
        blocked_id=blocked_id,
    )
    operations = [Put(block)]
    if friendship := get_friendship(store, blocker_id, blocked_id):
        operations.append(Delete(Friendship, friendship.id))
    for request in get_pending_requests_between(store, blocker_id, blocked_id):
        operations.append(Delete(FriendRequest, request.id))

    store.atomic_batch(operations)
    logger.info(f"User {blocker_id} blocked {blocked_id}")
    return block


def unblock_user(store: RelationshipStore, blocker_id: str, blocked_id: str) -> None:
    """Lift a block. The previous friendship is not restored.

    Raises:
        NotFoundError: If ``blocker_id`` has not blocked ``blocked_id``.
    """
    block = get_block(store, blocker_id, blocked_id)
    if block is None:
        raise NotFoundError("Block not found.")

    store.delete(Block, block.id)
    logger.info(f"User {blocker_id} unblocked {blocked_id}")
