"""Data models for the friend blueprint."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from huddle.core.constants import (
    BLOCKS_COLLECTION,
    FRIEND_REQUESTS_COLLECTION,
    FRIENDSHIPS_COLLECTION,
    STATUS_PENDING,
)
from huddle.core.types import Record, as_datetime, compose_id, utcnow
from huddle.user.models import UserProfile


def normalize_pair(user_id_1: str, user_id_2: str) -> tuple[str, str]:
    """Order two user ids so the smaller one comes first."""
    if user_id_1 < user_id_2:
        return user_id_1, user_id_2
    return user_id_2, user_id_1


def friendship_id(user_id_1: str, user_id_2: str) -> str:
    """Deterministic document id of the friendship between two users."""
    user_a, user_b = normalize_pair(user_id_1, user_id_2)
    return compose_id(user_a, user_b)


def block_id(blocker_id: str, blocked_id: str) -> str:
    """Deterministic document id of a directed block."""
    return compose_id(blocker_id, blocked_id)


@dataclass
class FriendRequest(Record):
    """A friend request document in Firestore."""

    COLLECTION: ClassVar[str] = FRIEND_REQUESTS_COLLECTION

    id: str
    from_user: str
    to_user: str
    message: Optional[str] = None
    status: str = STATUS_PENDING
    created_at: datetime.datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime.datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> FriendRequest:
        return cls(
            id=doc_id,
            from_user=data["from"],
            to_user=data["to"],
            message=data.get("message"),
            # Documents written before statuses existed are pending by definition
            status=data.get("status") or STATUS_PENDING,
            created_at=as_datetime(data.get("createdAt")) or utcnow(),
            updated_at=as_datetime(data.get("updatedAt")),
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "from": self.from_user,
            "to": self.to_user,
            "status": self.status,
            "createdAt": self.created_at,
        }
        if self.message:
            doc["message"] = self.message
        if self.updated_at:
            doc["updatedAt"] = self.updated_at
        return doc

    @property
    def is_pending(self) -> bool:
        return self.status == STATUS_PENDING

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "from": self.from_user,
            "to": self.to_user,
            "message": self.message,
            "status": self.status,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class Friendship(Record):
    """The canonical undirected friendship edge (``user_a < user_b``)."""

    COLLECTION: ClassVar[str] = FRIENDSHIPS_COLLECTION

    id: str
    user_a: str
    user_b: str
    created_at: datetime.datetime = field(default_factory=utcnow)

    @classmethod
    def between(cls, user_id_1: str, user_id_2: str) -> Friendship:
        """Build the canonical edge for two users, in either order."""
        user_a, user_b = normalize_pair(user_id_1, user_id_2)
        return cls(id=friendship_id(user_a, user_b), user_a=user_a, user_b=user_b)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Friendship:
        return cls(
            id=doc_id,
            user_a=data["userA"],
            user_b=data["userB"],
            created_at=as_datetime(data.get("createdAt")) or utcnow(),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "userA": self.user_a,
            "userB": self.user_b,
            "createdAt": self.created_at,
        }

    def other(self, user_id: str) -> str:
        """Return the friend on the other end of the edge."""
        return self.user_b if user_id == self.user_a else self.user_a

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userA": self.user_a,
            "userB": self.user_b,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class Block(Record):
    """A directed block: ``blocker_id`` no longer interacts with ``blocked_id``."""

    COLLECTION: ClassVar[str] = BLOCKS_COLLECTION

    id: str
    blocker_id: str
    blocked_id: str
    created_at: datetime.datetime = field(default_factory=utcnow)

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Block:
        return cls(
            id=doc_id,
            blocker_id=data["blockerId"],
            blocked_id=data["blockedId"],
            created_at=as_datetime(data.get("createdAt")) or utcnow(),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "blockerId": self.blocker_id,
            "blockedId": self.blocked_id,
            "createdAt": self.created_at,
        }


@dataclass
class FriendEntry:
    """A friend as listed on a user's friends page."""

    friendship_id: str
    user: UserProfile
    friends_since: datetime.datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "friendshipId": self.friendship_id,
            "user": self.user.to_summary(),
            "friendsSince": self.friends_since.isoformat(),
        }


@dataclass
class RequestEntry:
    """A friend request joined with the user on the other side."""

    request: FriendRequest
    user: UserProfile

    def to_dict(self) -> dict[str, Any]:
        return {**self.request.to_dict(), "user": self.user.to_summary()}


@dataclass
class FriendSuggestion:
    """A ranked friend suggestion."""

    user: UserProfile
    mutual_friends: int
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "user": self.user.to_summary(),
            "mutualFriends": self.mutual_friends,
            "reason": self.reason,
        }
