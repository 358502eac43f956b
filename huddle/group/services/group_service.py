"""Service layer for group membership and role governance."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional

from huddle.chat.models import Chat
from huddle.core.constants import (
    GROUP_MAX_MEMBERS,
    GROUP_MIN_MEMBERS,
    GROUP_NAME_MAX_LENGTH,
    GROUP_ROLES,
    ROLE_ADMIN,
    ROLE_SUB_ADMIN,
    STATUS_ACCEPTED,
    STATUS_PENDING,
    STATUS_REJECTED,
)
from huddle.errors import (
    AllAlreadyMembers,
    AlreadyMember,
    AlreadySubAdmin,
    ForbiddenError,
    GroupFull,
    InvalidRole,
    NotFoundError,
    NotMember,
    SelfRoleChange,
    ValidationError,
)
from huddle.store import Delete, Put, WriteOp, contains, eq
from huddle.user.services import require_users

from ..models import Group, JoinInvitation
from ..roster import Roster
from ..succession import apply_succession, plan_succession

if TYPE_CHECKING:
    from huddle.store import RelationshipStore

logger = logging.getLogger(__name__)


class GroupService:
    """Service class for group-related operations."""

    @staticmethod
    def get_group(store: RelationshipStore, group_id: str) -> Group:
        """Fetch a group or raise ``NotFoundError``."""
        group = store.get(Group, group_id)
        if group is None:
            raise NotFoundError("Group not found.")
        return group

    @staticmethod
    def get_user_groups(store: RelationshipStore, user_id: str) -> list[Group]:
        """Groups the user belongs to, newest first."""
        groups = store.query(Group, [contains("memberIds", user_id)])
        groups.sort(key=lambda group: group.created_at, reverse=True)
        return groups

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Group name is required.")
        if len(name) > GROUP_NAME_MAX_LENGTH:
            raise ValidationError(
                f"Group name cannot exceed {GROUP_NAME_MAX_LENGTH} characters."
            )
        return name

    @staticmethod
    def _check_capacity(group: Group, incoming: int) -> None:
        if group.member_count + incoming > GROUP_MAX_MEMBERS:
            raise GroupFull()

    @staticmethod
    def _require_manager(group: Group, user_id: str) -> None:
        if not group.roster.can_manage(user_id):
            raise ForbiddenError(
                "Only the group admin or sub-admins can perform this action."
            )

    @staticmethod
    def _pending_invitations(
        store: RelationshipStore,
        group_id: str,
        sender_ids: Optional[Iterable[str]] = None,
    ) -> list[JoinInvitation]:
        """Pending join invitations of a group, optionally for some senders."""
        invitations = store.query(
            JoinInvitation, [eq("groupId", group_id), eq("status", STATUS_PENDING)]
        )
        if sender_ids is None:
            return invitations
        senders = set(sender_ids)
        return [inv for inv in invitations if inv.sender_id in senders]

    @staticmethod
    def _close_invitations(
        invitations: Iterable[JoinInvitation], status: str
    ) -> list[WriteOp]:
        operations: list[WriteOp] = []
        for invitation in invitations:
            invitation.close(status)
            operations.append(Put(invitation))
        return operations

    @staticmethod
    def create_group(  # noqa: PLR0913
        store: RelationshipStore,
        founder_id: str,
        name: str,
        member_ids: Iterable[str] = (),
        auto_member_approval: bool = True,
        avatar: Optional[str] = None,
    ) -> Group:
        """Create a group with ``founder_id`` as its admin, plus its group chat."""
        name = GroupService._clean_name(name)
        members = list(dict.fromkeys([founder_id, *member_ids]))
        if len(members) < GROUP_MIN_MEMBERS:
            raise ValidationError(
                f"A group needs at least {GROUP_MIN_MEMBERS} members."
            )
        if len(members) > GROUP_MAX_MEMBERS:
            raise GroupFull()
        require_users(store, members)

        group = Group(
            id=store.new_id(Group),
            name=name,
            roster=Roster(admin_id=founder_id, member_ids=members),
            avatar=avatar,
            auto_member_approval=auto_member_approval,
        )
        store.atomic_batch([Put(group), Put(Chat.for_group(group.id))])
        logger.info(
            f"Group {group.id} created by {founder_id} with {len(members)} members"
        )
        return group

    @staticmethod
    def update_group(  # noqa: PLR0913
        store: RelationshipStore,
        acting_user: str,
        group_id: str,
        name: Optional[str] = None,
        avatar: Optional[str] = None,
        auto_member_approval: Optional[bool] = None,
    ) -> Group:
        """Change a group's name, avatar or auto-approval setting."""
        group = GroupService.get_group(store, group_id)
        GroupService._require_manager(group, acting_user)

        if name is not None:
            group.name = GroupService._clean_name(name)
        if avatar is not None:
            group.avatar = avatar or None
        if auto_member_approval is not None:
            group.auto_member_approval = auto_member_approval
        group.touch()
        store.atomic_batch([Put(group)])
        return group

    @staticmethod
    def add_members(
        store: RelationshipStore,
        acting_user: str,
        group_id: str,
        user_ids: Iterable[str],
    ) -> Group:
        """Add users to a group on behalf of its admin or a sub-admin.

        Raises:
            AllAlreadyMembers: If every listed user is already in the group.
        """
        requested = list(dict.fromkeys(user_ids))
        group = GroupService.get_group(store, group_id)
        GroupService._require_manager(group, acting_user)
        new_ids = [uid for uid in requested if not group.roster.is_member(uid)]
        if not new_ids:
            raise AllAlreadyMembers()
        require_users(store, new_ids)

        # Validation above costs a round-trip; act on a fresh copy of the group
        group = GroupService.get_group(store, group_id)
        GroupService._require_manager(group, acting_user)
        new_ids = [uid for uid in new_ids if not group.roster.is_member(uid)]
        if not new_ids:
            raise AllAlreadyMembers()
        GroupService._check_capacity(group, len(new_ids))

        group.roster.add(new_ids)
        group.touch()
        operations: list[WriteOp] = [Put(group)]
        operations += GroupService._close_invitations(
            GroupService._pending_invitations(store, group_id, new_ids),
            STATUS_ACCEPTED,
        )
        store.atomic_batch(operations)
        logger.info(f"{acting_user} added {len(new_ids)} member(s) to group {group_id}")
        return group

    @staticmethod
    def remove_member(
        store: RelationshipStore,
        acting_user: str,
        group_id: str,
        target_user: str,
    ) -> Optional[Group]:
        """Remove a member, or let a member leave.

        When the admin leaves, a successor is chosen (see ``succession``).
        Returns the updated group, or None if the group was dissolved.
        """
        group = GroupService.get_group(store, group_id)
        roster = group.roster
        if acting_user != target_user:
            GroupService._require_manager(group, acting_user)
        if not roster.is_member(target_user):
            raise NotMember()

        if acting_user != target_user and roster.is_admin(target_user):
            raise ForbiddenError("The group admin can only leave on their own.")

        if not roster.is_admin(target_user):
            roster.remove(target_user)
            group.touch()
            store.atomic_batch([Put(group)])
            logger.info(f"{acting_user} removed {target_user} from group {group_id}")
            return group

        succession = plan_succession(roster)
        successor_roster = apply_succession(roster, succession)
        if successor_roster is None:
            GroupService._dissolve(store, group)
            return None

        group.roster = successor_roster
        group.touch()
        store.atomic_batch([Put(group)])
        logger.info(
            f"Admin {target_user} left group {group_id}; "
            f"{succession.successor_id} succeeds via {succession.transition}"
        )
        return group

    @staticmethod
    def _dissolve(store: RelationshipStore, group: Group) -> None:
        """Delete a group, its chat and close its pending invitations."""
        operations: list[WriteOp] = [Delete(Group, group.id)]
        if store.get(Chat, group.id) is not None:
            operations.append(Delete(Chat, group.id))
        operations += GroupService._close_invitations(
            GroupService._pending_invitations(store, group.id), STATUS_REJECTED
        )
        store.atomic_batch(operations)
        logger.info(f"Group {group.id} dissolved after its last member left")

    @staticmethod
    def change_role(
        store: RelationshipStore,
        acting_user: str,
        group_id: str,
        target_user: str,
        new_role: str,
    ) -> Group:
        """Change a member's role. Only the group admin may do this.

        ``admin`` transfers adminship (the previous admin becomes a
        sub-admin), ``subAdmin`` promotes, ``member`` demotes.
        """
        if new_role not in GROUP_ROLES:
            raise InvalidRole(f"Unknown group role: {new_role!r}.")

        group = GroupService.get_group(store, group_id)
        roster = group.roster
        if not roster.is_admin(acting_user):
            raise ForbiddenError("Only the group admin can change roles.")
        if target_user == acting_user:
            raise SelfRoleChange()
        if not roster.is_member(target_user):
            raise NotMember()

        if new_role == ROLE_ADMIN:
            roster.transfer_admin(target_user)
        elif new_role == ROLE_SUB_ADMIN:
            if roster.is_sub_admin(target_user):
                raise AlreadySubAdmin()
            roster.promote(target_user)
        else:
            if not roster.is_sub_admin(target_user):
                raise AlreadyMember("User is already a regular member.")
            roster.demote(target_user)

        group.touch()
        store.atomic_batch([Put(group)])
        logger.info(f"{target_user} is now {new_role} of group {group_id}")
        return group
