"""Ordered group membership with the admin / sub-admin / member hierarchy."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from huddle.core.constants import ROLE_ADMIN, ROLE_MEMBER, ROLE_SUB_ADMIN


def _unique(ids: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(i for i in ids if i))


@dataclass
class Roster:
    """Who is in a group and with which role.

    ``member_ids`` and ``sub_admin_ids`` are kept in insertion order; admin
    succession picks "the first" entry, so the order is part of the state.
    Invariants: the admin is a member, sub-admins are members and never the
    admin, no id appears twice.
    """

    admin_id: str
    sub_admin_ids: list[str] = field(default_factory=list)
    member_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.member_ids = _unique(self.member_ids)
        if self.admin_id not in self.member_ids:
            self.member_ids.insert(0, self.admin_id)
        self.sub_admin_ids = [
            uid
            for uid in _unique(self.sub_admin_ids)
            if uid != self.admin_id and uid in self.member_ids
        ]

    @property
    def member_count(self) -> int:
        return len(self.member_ids)

    def copy(self) -> Roster:
        return Roster(
            admin_id=self.admin_id,
            sub_admin_ids=list(self.sub_admin_ids),
            member_ids=list(self.member_ids),
        )

    def is_member(self, user_id: str) -> bool:
        return user_id in self.member_ids

    def is_admin(self, user_id: str) -> bool:
        return user_id == self.admin_id

    def is_sub_admin(self, user_id: str) -> bool:
        return user_id in self.sub_admin_ids

    def can_manage(self, user_id: str) -> bool:
        """Admins and sub-admins may add and remove members."""
        return self.is_admin(user_id) or self.is_sub_admin(user_id)

    def role_of(self, user_id: str) -> Optional[str]:
        if self.is_admin(user_id):
            return ROLE_ADMIN
        if self.is_sub_admin(user_id):
            return ROLE_SUB_ADMIN
        if self.is_member(user_id):
            return ROLE_MEMBER
        return None

    def others(self, user_id: str) -> list[str]:
        """Members other than ``user_id``, in insertion order."""
        return [uid for uid in self.member_ids if uid != user_id]

    def add(self, user_ids: Iterable[str]) -> list[str]:
        """Append new members and return the ids that were actually added."""
        added = [uid for uid in _unique(user_ids) if uid not in self.member_ids]
        self.member_ids.extend(added)
        return added

    def remove(self, user_id: str) -> None:
        """Drop a non-admin member and any sub-admin role they held."""
        if self.is_admin(user_id):
            raise ValueError("The admin must be replaced before leaving the roster.")
        self.member_ids = [uid for uid in self.member_ids if uid != user_id]
        self.sub_admin_ids = [uid for uid in self.sub_admin_ids if uid != user_id]

    def promote(self, user_id: str) -> None:
        """Make a member a sub-admin (appended last in succession order)."""
        if not self.is_member(user_id) or self.is_admin(user_id):
            raise ValueError(f"{user_id} cannot become a sub-admin.")
        if user_id not in self.sub_admin_ids:
            self.sub_admin_ids.append(user_id)

    def demote(self, user_id: str) -> None:
        self.sub_admin_ids = [uid for uid in self.sub_admin_ids if uid != user_id]

    def transfer_admin(self, user_id: str) -> None:
        """Hand adminship to another member; the old admin becomes a sub-admin."""
        if not self.is_member(user_id):
            raise ValueError(f"{user_id} is not a member.")
        if self.is_admin(user_id):
            return
        previous = self.admin_id
        self.demote(user_id)
        self.admin_id = user_id
        self.sub_admin_ids.append(previous)

    def replace_admin(self, successor_id: str) -> None:
        """Install ``successor_id`` as admin and drop the current admin entirely."""
        departing = self.admin_id
        self.demote(successor_id)
        self.admin_id = successor_id
        self.member_ids = [uid for uid in self.member_ids if uid != departing]
