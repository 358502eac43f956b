"""Data models for users."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Optional

from huddle.core.constants import USERS_COLLECTION
from huddle.core.types import Record


@dataclass
class UserProfile(Record):
    """The slice of a user document the social graph needs.

    Full profiles are owned by the identity provider; only display fields
    and the account flags used to filter suggestions are read here.
    """

    COLLECTION: ClassVar[str] = USERS_COLLECTION

    id: str
    display_name: str = ""
    avatar: Optional[str] = None
    is_active: bool = True
    is_locked: bool = False

    @classmethod
    def from_document(cls, doc_id: str, data: dict[str, Any]) -> UserProfile:
        display_name = (
            data.get("displayName") or data.get("name") or data.get("username") or ""
        )
        return cls(
            id=doc_id,
            display_name=display_name,
            avatar=data.get("avatar") or data.get("avatarUrl"),
            is_active=bool(data.get("isActive", True)),
            is_locked=bool(data.get("isLocked", False)),
        )

    def to_document(self) -> dict[str, Any]:
        return {
            "displayName": self.display_name,
            "avatar": self.avatar,
            "isActive": self.is_active,
            "isLocked": self.is_locked,
        }

    @property
    def is_suggestible(self) -> bool:
        return self.is_active and not self.is_locked

    def to_summary(self) -> dict[str, Any]:
        """Public view of the user embedded in API payloads."""
        return {"id": self.id, "displayName": self.display_name, "avatar": self.avatar}
