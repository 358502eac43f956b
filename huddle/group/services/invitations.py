"""Join requests for groups that do not auto-approve members."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from huddle.core.constants import STATUS_ACCEPTED, STATUS_REJECTED
from huddle.errors import (
    AlreadyMember,
    AlreadyPending,
    AlreadyProcessedError,
    NotFoundError,
)
from huddle.store import Put, WriteOp
from huddle.user.services import require_user

from ..models import JoinInvitation, JoinResult
from .group_service import GroupService

if TYPE_CHECKING:
    from huddle.store import RelationshipStore

logger = logging.getLogger(__name__)


def request_join(
    store: RelationshipStore,
    user_id: str,
    group_id: str,
    content: Optional[str] = None,
) -> JoinResult:
    """Ask to join a group.

    With auto-approval on, the user joins immediately. Otherwise a pending
    invitation is addressed to the group admin.
    """
    user = require_user(store, user_id)
    group = GroupService.get_group(store, group_id)
    if group.roster.is_member(user_id):
        raise AlreadyMember("You are already a member of this group.")

    if group.auto_member_approval:
        GroupService._check_capacity(group, 1)
        group.roster.add([user_id])
        group.touch()
        operations: list[WriteOp] = [Put(group)]
        operations += GroupService._close_invitations(
            GroupService._pending_invitations(store, group_id, [user_id]),
            STATUS_ACCEPTED,
        )
        store.atomic_batch(operations)
        logger.info(f"{user_id} joined group {group_id} (auto-approved)")
        return JoinResult(group=group, joined=True)

    if GroupService._pending_invitations(store, group_id, [user_id]):
        raise AlreadyPending()

    invitation = JoinInvitation(
        id=store.new_id(JoinInvitation),
        sender_id=user_id,
        receiver_id=group.admin_id,
        group_id=group_id,
        content=content
        or f"{user.display_name or user_id} wants to join {group.name}",
    )
    store.put(invitation)
    logger.info(f"Join request {invitation.id} from {user_id} for group {group_id}")
    return JoinResult(group=group, joined=False, invitation=invitation)


def review_join_request(
    store: RelationshipStore, acting_user: str, invitation_id: str, approve: bool
) -> JoinInvitation:
    """Approve or reject a pending join request as group admin or sub-admin."""
    invitation = store.get(JoinInvitation, invitation_id)
    if invitation is None:
        raise NotFoundError("Join request not found.")

    group = GroupService.get_group(store, invitation.group_id)
    GroupService._require_manager(group, acting_user)
    if not invitation.is_pending:
        raise AlreadyProcessedError()

    if not approve:
        invitation.close(STATUS_REJECTED)
        store.put(invitation)
        logger.info(f"Join request {invitation.id} rejected by {acting_user}")
        return invitation

    if group.roster.is_member(invitation.sender_id):
        raise AlreadyMember()
    GroupService._check_capacity(group, 1)

    group.roster.add([invitation.sender_id])
    group.touch()
    invitation.close(STATUS_ACCEPTED)
    store.atomic_batch([Put(group), Put(invitation)])
    logger.info(f"Join request {invitation.id} approved by {acting_user}")
    return invitation


def get_join_requests(
    store: RelationshipStore, acting_user: str, group_id: str
) -> list[JoinInvitation]:
    """Pending join requests of a group, oldest first."""
    group = GroupService.get_group(store, group_id)
    GroupService._require_manager(group, acting_user)
    invitations = GroupService._pending_invitations(store, group_id)
    invitations.sort(key=lambda invitation: invitation.created_at)
    return invitations
