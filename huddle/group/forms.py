"""Forms for the group blueprint."""

from flask_wtf import FlaskForm
from wtforms import SelectField, StringField
from wtforms.validators import DataRequired, Length, Optional

from huddle.core.constants import GROUP_ROLES
from huddle.forms import IdListField, OptionalBooleanField


class GroupForm(FlaskForm):
    """Form for creating a new group."""

    name = StringField("Group Name", validators=[DataRequired()])
    member_ids = IdListField("Members")
    avatar = StringField("Avatar", validators=[Optional()])
    auto_member_approval = OptionalBooleanField("Auto-approve members")


class EditGroupForm(FlaskForm):
    """Form for editing a group. Absent keys leave the group unchanged."""

    name = StringField("Group Name", validators=[Optional()])
    avatar = StringField("Avatar", validators=[Optional()])
    auto_member_approval = OptionalBooleanField("Auto-approve members")


class AddMembersForm(FlaskForm):
    user_ids = IdListField("Users")


class RoleForm(FlaskForm):
    """Form for changing a member's role."""

    role = SelectField(
        "Role",
        choices=[(role, role) for role in GROUP_ROLES],
        validate_choice=False,
        validators=[DataRequired()],
    )


class JoinRequestForm(FlaskForm):
    content = StringField("Message", validators=[Optional(), Length(max=500)])
