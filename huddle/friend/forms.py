"""Forms for the friend blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired, Optional


class FriendRequestForm(FlaskForm):
    """Body of a new friend request."""

    to = StringField("Recipient", validators=[DataRequired()])
    message = StringField("Message", validators=[Optional()])


class BlockForm(FlaskForm):
    """Body of a block request."""

    user_id = StringField("User", validators=[DataRequired()])
