"""Routes for the group blueprint."""

from flask import current_app

from huddle.auth.decorators import current_user_id, login_required
from huddle.forms import submitted, validate_form
from huddle.store import get_store
from huddle.utils import api_response

from . import bp
from .forms import AddMembersForm, EditGroupForm, GroupForm, JoinRequestForm, RoleForm
from .services import GroupService, get_join_requests, request_join, review_join_request


@bp.route("/", methods=["GET"])
@login_required
def view_groups():
    """List the groups the current user belongs to."""
    groups = GroupService.get_user_groups(get_store(), current_user_id())
    return api_response([group.to_dict() for group in groups])


@bp.route("/", methods=["POST"])
@login_required
def create_group():
    """Create a group with the current user as its admin."""
    form = validate_form(GroupForm())
    auto_approval = form.auto_member_approval.data
    group = GroupService.create_group(
        get_store(),
        current_user_id(),
        form.name.data,
        member_ids=form.member_ids.data or [],
        auto_member_approval=True if auto_approval is None else auto_approval,
        avatar=form.avatar.data or None,
    )
    current_app.logger.info(f"Group {group.id} created")
    return api_response(group.to_dict(), "Group created successfully.", 201)


@bp.route("/<string:group_id>", methods=["GET"])
@login_required
def view_group(group_id):
    group = GroupService.get_group(get_store(), group_id)
    return api_response(group.to_dict())


@bp.route("/<string:group_id>", methods=["PATCH"])
@login_required
def edit_group(group_id):
    """Edit a group's name, avatar or auto-approval setting."""
    form = validate_form(EditGroupForm())
    group = GroupService.update_group(
        get_store(),
        current_user_id(),
        group_id,
        name=submitted(form.name),
        avatar=submitted(form.avatar),
        auto_member_approval=form.auto_member_approval.data,
    )
    return api_response(group.to_dict(), "Group updated successfully.")


@bp.route("/<string:group_id>/members", methods=["POST"])
@login_required
def add_members(group_id):
    """Add users to a group as its admin or a sub-admin."""
    form = validate_form(AddMembersForm())
    group = GroupService.add_members(
        get_store(), current_user_id(), group_id, form.user_ids.data or []
    )
    return api_response(group.to_dict(), "Members added.")


@bp.route("/<string:group_id>/members/<string:user_id>", methods=["DELETE"])
@login_required
def remove_member(group_id, user_id):
    """Remove a member. Removing yourself is the same as leaving."""
    group = GroupService.remove_member(
        get_store(), current_user_id(), group_id, user_id
    )
    if group is None:
        return api_response(message="Group dissolved.")
    return api_response(group.to_dict(), "Member removed.")


@bp.route("/<string:group_id>/leave", methods=["POST"])
@login_required
def leave_group(group_id):
    """Leave a group. An admin leaving hands the group to a successor."""
    user_id = current_user_id()
    group = GroupService.remove_member(get_store(), user_id, group_id, user_id)
    if group is None:
        current_app.logger.info(f"Group {group_id} dissolved when {user_id} left")
        return api_response(message="You left the group. The group was dissolved.")
    return api_response(group.to_dict(), "You left the group.")


@bp.route("/<string:group_id>/members/<string:user_id>/role", methods=["PUT"])
@login_required
def change_role(group_id, user_id):
    form = validate_form(RoleForm())
    group = GroupService.change_role(
        get_store(), current_user_id(), group_id, user_id, form.role.data
    )
    return api_response(group.to_dict(), "Role updated.")


@bp.route("/<string:group_id>/join", methods=["POST"])
@login_required
def join_group(group_id):
    """Join a group, or ask to join when it does not auto-approve members."""
    form = validate_form(JoinRequestForm())
    result = request_join(get_store(), current_user_id(), group_id, form.content.data)
    if result.joined:
        return api_response(result.to_dict(), "You joined the group.")
    return api_response(result.to_dict(), "Join request sent.", 202)


@bp.route("/<string:group_id>/join-requests", methods=["GET"])
@login_required
def join_requests(group_id):
    """Pending join requests, for the admin and sub-admins."""
    invitations = get_join_requests(get_store(), current_user_id(), group_id)
    return api_response([invitation.to_dict() for invitation in invitations])


@bp.route("/join-requests/<string:invitation_id>/approve", methods=["POST"])
@login_required
def approve_join_request(invitation_id):
    invitation = review_join_request(
        get_store(), current_user_id(), invitation_id, approve=True
    )
    return api_response(invitation.to_dict(), "Join request approved.")


@bp.route("/join-requests/<string:invitation_id>/reject", methods=["POST"])
@login_required
def reject_join_request(invitation_id):
    invitation = review_join_request(
        get_store(), current_user_id(), invitation_id, approve=False
    )
    return api_response(invitation.to_dict(), "Join request rejected.")
