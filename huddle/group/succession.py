"""Admin succession when a group's admin leaves.

Three transitions, tried in order:

1. ``promote_sub_admin``: the first sub-admin (insertion order) becomes admin.
2. ``promote_member``: with no sub-admins, the first other member does.
3. ``dissolve_group``: the admin was the last member; the group goes away.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .roster import Roster

PROMOTE_SUB_ADMIN = "promote_sub_admin"
PROMOTE_MEMBER = "promote_member"
DISSOLVE_GROUP = "dissolve_group"


@dataclass(frozen=True)
class Succession:
    """The transition chosen for a departing admin."""

    transition: str
    departing_id: str
    successor_id: Optional[str] = None


def plan_succession(roster: Roster) -> Succession:
    """Pick the transition for the current admin leaving ``roster``."""
    departing = roster.admin_id
    if roster.sub_admin_ids:
        return Succession(PROMOTE_SUB_ADMIN, departing, roster.sub_admin_ids[0])
    others = roster.others(departing)
    if others:
        return Succession(PROMOTE_MEMBER, departing, others[0])
    return Succession(DISSOLVE_GROUP, departing)


def promote_sub_admin(roster: Roster, successor_id: str) -> Roster:
    if not roster.is_sub_admin(successor_id):
        raise ValueError(f"{successor_id} is not a sub-admin.")
    updated = roster.copy()
    updated.replace_admin(successor_id)
    return updated


def promote_member(roster: Roster, successor_id: str) -> Roster:
    if not roster.is_member(successor_id) or roster.is_admin(successor_id):
        raise ValueError(f"{successor_id} cannot succeed the admin.")
    updated = roster.copy()
    updated.replace_admin(successor_id)
    return updated


def dissolve_group(roster: Roster) -> None:
    if roster.others(roster.admin_id):
        raise ValueError("Only a group whose admin is the sole member dissolves.")
    return None


TRANSITIONS: dict[str, Callable[[Roster, str], Roster]] = {
    PROMOTE_SUB_ADMIN: promote_sub_admin,
    PROMOTE_MEMBER: promote_member,
}


def apply_succession(roster: Roster, succession: Succession) -> Optional[Roster]:
    """Return the roster after the transition, or None if the group dissolves."""
    if succession.transition == DISSOLVE_GROUP:
        return dissolve_group(roster)
    transition = TRANSITIONS[succession.transition]
    return transition(roster, succession.successor_id or "")
