"""Forms for the chat blueprint."""

from flask_wtf import FlaskForm
from wtforms import StringField
from wtforms.validators import DataRequired


class PinForm(FlaskForm):
    """Form for pinning a message."""

    message_id = StringField("Message", validators=[DataRequired()])
