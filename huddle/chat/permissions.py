"""Who may read a chat and who may pin in it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from huddle.errors import ForbiddenError, NotFoundError
from huddle.group.models import Group

if TYPE_CHECKING:
    from huddle.store import RelationshipStore

    from .models import Chat


def _group_of(store: RelationshipStore, chat: Chat) -> Group:
    group = store.get(Group, chat.group_id or chat.id)
    if group is None:
        raise NotFoundError("Group not found.")
    return group


def ensure_participant(store: RelationshipStore, chat: Chat, user_id: str) -> None:
    """Raise ``ForbiddenError`` unless the user takes part in the chat."""
    if chat.is_group:
        allowed = _group_of(store, chat).roster.is_member(user_id)
    else:
        allowed = user_id in chat.participant_ids
    if not allowed:
        raise ForbiddenError("You are not a participant of this chat.")


def ensure_can_pin(store: RelationshipStore, chat: Chat, user_id: str) -> None:
    """Peer chats: any participant may pin. Group chats: admin or sub-admins."""
    if not chat.is_group:
        ensure_participant(store, chat, user_id)
        return

    if not _group_of(store, chat).roster.can_manage(user_id):
        raise ForbiddenError("Only the group admin or sub-admins can pin messages.")
