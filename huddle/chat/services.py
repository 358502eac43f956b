"""Service layer for chats and their pinned messages."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from huddle.core.constants import PINNED_CONTENT_LIMIT
from huddle.core.types import utcnow
from huddle.errors import AlreadyPinned, NotFoundError, NotPinned, SelfRequest
from huddle.user.services import require_users

from .models import Chat, PinnedMessage, peer_chat_id

if TYPE_CHECKING:
    from huddle.store import RelationshipStore

logger = logging.getLogger(__name__)


def get_chat(store: RelationshipStore, chat_id: str) -> Chat:
    chat = store.get(Chat, chat_id)
    if chat is None:
        raise NotFoundError("Chat not found.")
    return chat


def get_or_create_peer_chat(
    store: RelationshipStore, user_id: str, other_id: str
) -> Chat:
    """Return the one-to-one chat between two users, creating it if needed."""
    if user_id == other_id:
        raise SelfRequest("You cannot open a chat with yourself.")
    existing = store.get(Chat, peer_chat_id(user_id, other_id))
    if existing is not None:
        return existing

    require_users(store, [user_id, other_id])
    chat = Chat.for_peers(user_id, other_id)
    store.put(chat)
    logger.info(f"Peer chat {chat.id} created")
    return chat


def pin_after(
    pinned: list[PinnedMessage], pin: PinnedMessage, limit: int = PINNED_CONTENT_LIMIT
) -> list[PinnedMessage]:
    """Append ``pin``, evicting the oldest entries beyond ``limit``."""
    if any(existing.message_id == pin.message_id for existing in pinned):
        raise AlreadyPinned()
    return [*pinned, pin][-limit:]


def pin_message(
    store: RelationshipStore,
    chat_id: str,
    message_id: str,
    pinned_by: Optional[str] = None,
) -> list[PinnedMessage]:
    """Pin a message. With three pins already, the oldest one is dropped.

    Who may pin is decided by the caller (see ``permissions``).
    """
    chat = get_chat(store, chat_id)
    pinned = pin_after(
        chat.pinned_content, PinnedMessage(message_id=message_id, pinned_by=pinned_by)
    )
    evicted = [pin.message_id for pin in chat.pinned_content if pin not in pinned]

    chat.pinned_content = pinned
    chat.last_update = utcnow()
    store.update(
        Chat,
        chat.id,
        {
            "pinnedContent": [pin.to_document() for pin in pinned],
            "lastUpdate": chat.last_update,
        },
    )
    if evicted:
        logger.info(f"Chat {chat_id}: pinning {message_id} evicted {evicted}")
    return pinned


def unpin_message(
    store: RelationshipStore, chat_id: str, message_id: str
) -> list[PinnedMessage]:
    chat = get_chat(store, chat_id)
    if message_id not in chat.pinned_ids:
        raise NotPinned()

    pinned = [pin for pin in chat.pinned_content if pin.message_id != message_id]
    chat.last_update = utcnow()
    store.update(
        Chat,
        chat.id,
        {
            "pinnedContent": [pin.to_document() for pin in pinned],
            "lastUpdate": chat.last_update,
        },
    )
    return pinned


def get_pinned_messages(store: RelationshipStore, chat_id: str) -> list[PinnedMessage]:
    """Pinned messages of a chat, oldest first."""
    return get_chat(store, chat_id).pinned_content
