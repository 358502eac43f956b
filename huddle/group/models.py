"""Data models for the group blueprint."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from huddle.core.constants import (
    GROUPS_COLLECTION,
    INVITATION_TYPE_GROUP,
    INVITATIONS_COLLECTION,
    STATUS_PENDING,
)
from huddle.core.types import Record, as_datetime, utcnow

from .roster import Roster


@dataclass
class Group(Record):
    """A group document in Firestore.

    ``memberCount`` is written on every save from the roster and never read
    back as a source of truth.
    """

    COLLECTION: ClassVar[str] = GROUPS_COLLECTION

    id: str
    name: str
    roster: Roster
    avatar: Optional[str] = None
    auto_member_approval: bool = True
    created_at: datetime.datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime.datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> Group:
        config = data.get("groupConfig") or {}
        return cls(
            id=doc_id,
            name=data.get("name", ""),
            roster=Roster(
                admin_id=data["adminId"],
                sub_admin_ids=list(data.get("subAdminIds") or []),
                member_ids=list(data.get("memberIds") or []),
            ),
            avatar=data.get("avatar"),
            auto_member_approval=bool(config.get("autoMemberApproval", True)),
            created_at=as_datetime(data.get("createdAt")) or utcnow(),
            updated_at=as_datetime(data.get("updatedAt")),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "avatar": self.avatar,
            "adminId": self.roster.admin_id,
            "subAdminIds": list(self.roster.sub_admin_ids),
            "memberIds": list(self.roster.member_ids),
            "memberCount": self.roster.member_count,
            "groupConfig": {"autoMemberApproval": self.auto_member_approval},
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @property
    def admin_id(self) -> str:
        return self.roster.admin_id

    @property
    def member_count(self) -> int:
        return self.roster.member_count

    def touch(self) -> None:
        self.updated_at = utcnow()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "avatar": self.avatar,
            "adminId": self.roster.admin_id,
            "subAdminIds": list(self.roster.sub_admin_ids),
            "memberIds": list(self.roster.member_ids),
            "memberCount": self.roster.member_count,
            "groupConfig": {"autoMemberApproval": self.auto_member_approval},
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class JoinInvitation(Record):
    """A request to join a group, addressed to the group admin."""

    COLLECTION: ClassVar[str] = INVITATIONS_COLLECTION

    id: str
    sender_id: str
    receiver_id: str
    group_id: str
    content: str = ""
    status: str = STATUS_PENDING
    type: str = INVITATION_TYPE_GROUP
    created_at: datetime.datetime = field(default_factory=utcnow)
    updated_at: Optional[datetime.datetime] = None

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> JoinInvitation:
        return cls(
            id=doc_id,
            sender_id=data["senderId"],
            receiver_id=data["receiverId"],
            group_id=data["groupId"],
            content=data.get("content", ""),
            status=data.get("status") or STATUS_PENDING,
            type=data.get("type") or INVITATION_TYPE_GROUP,
            created_at=as_datetime(data.get("createdAt")) or utcnow(),
            updated_at=as_datetime(data.get("updatedAt")),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "senderId": self.sender_id,
            "receiverId": self.receiver_id,
            "groupId": self.group_id,
            "content": self.content,
            "status": self.status,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @property
    def is_pending(self) -> bool:
        return self.status == STATUS_PENDING

    def close(self, status: str) -> None:
        self.status = status
        self.updated_at = utcnow()

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "senderId": self.sender_id,
            "receiverId": self.receiver_id,
            "groupId": self.group_id,
            "content": self.content,
            "status": self.status,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass
class JoinResult:
    """Outcome of a join request: joined immediately or awaiting review."""

    group: Group
    joined: bool
    invitation: Optional[JoinInvitation] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "joined": self.joined,
            "group": self.group.to_dict(),
            "invitation": self.invitation.to_dict() if self.invitation else None,
        }
