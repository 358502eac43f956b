"""Data models for the chat blueprint."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from huddle.core.constants import CHAT_TYPE_GROUP, CHAT_TYPE_PEER, CHATS_COLLECTION
from huddle.core.types import Record, as_datetime, compose_id, utcnow


def peer_chat_id(user_id_1: str, user_id_2: str) -> str:
    """Deterministic id of the one-to-one chat between two users."""
    first, second = sorted((user_id_1, user_id_2))
    return compose_id("peer", first, second)


@dataclass
class PinnedMessage:
    """A reference to a pinned message."""

    message_id: str
    pinned_by: Optional[str] = None
    pinned_at: datetime.datetime = field(default_factory=utcnow)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PinnedMessage:
        return cls(
            message_id=data["messageId"],
            pinned_by=data.get("pinnedBy"),
            pinned_at=as_datetime(data.get("pinnedAt")) or utcnow(),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "messageId": self.message_id,
            "pinnedBy": self.pinned_by,
            "pinnedAt": self.pinned_at,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "messageId": self.message_id,
            "pinnedBy": self.pinned_by,
            "pinnedAt": self.pinned_at.isoformat(),
        }


@dataclass
class Chat(Record):
    """A chat document in Firestore.

    Group chats share their group's id and take membership from the group
    document; peer chats list their two participants.
    """

    COLLECTION: ClassVar[str] = CHATS_COLLECTION

    id: str
    type: str
    participant_ids: list[str] = field(default_factory=list)
    group_id: Optional[str] = None
    pinned_content: list[PinnedMessage] = field(default_factory=list)
    last_update: datetime.datetime = field(default_factory=utcnow)

    @classmethod
    def for_group(cls, group_id: str) -> Chat:
        return cls(id=group_id, type=CHAT_TYPE_GROUP, group_id=group_id)

    @classmethod
    def for_peers(cls, user_id_1: str, user_id_2: str) -> Chat:
        return cls(
            id=peer_chat_id(user_id_1, user_id_2),
            type=CHAT_TYPE_PEER,
            participant_ids=sorted((user_id_1, user_id_2)),
        )

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Chat:
        return cls(
            id=doc_id,
            type=data.get("type", CHAT_TYPE_PEER),
            participant_ids=list(data.get("participantIds") or []),
            group_id=data.get("groupId"),
            pinned_content=[
                PinnedMessage.from_dict(item)
                for item in data.get("pinnedContent") or []
            ],
            last_update=as_datetime(data.get("lastUpdate")) or utcnow(),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "participantIds": list(self.participant_ids),
            "groupId": self.group_id,
            "pinnedContent": [pin.to_document() for pin in self.pinned_content],
            "lastUpdate": self.last_update,
        }

    @property
    def is_group(self) -> bool:
        return self.type == CHAT_TYPE_GROUP

    @property
    def pinned_ids(self) -> list[str]:
        return [pin.message_id for pin in self.pinned_content]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "participantIds": list(self.participant_ids),
            "groupId": self.group_id,
            "pinnedContent": [pin.to_dict() for pin in self.pinned_content],
            "lastUpdate": self.last_update.isoformat(),
        }
