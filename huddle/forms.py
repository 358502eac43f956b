"""Shared form fields and helpers for JSON request bodies.

Flask-WTF reads ``request.get_json()`` as form data when the request is
JSON, so every blueprint validates its bodies with ordinary ``FlaskForm``
classes.
"""

from wtforms import BooleanField, Field

from .errors import ValidationError


class IdListField(Field):
    """A JSON array of document ids."""

    def process_formdata(self, valuelist):
        ids = []
        for value in valuelist:
            if not isinstance(value, str) or not value.strip():
                raise ValueError("Ids must be non-empty strings.")
            ids.append(value.strip())
        self.data = ids

    def _value(self):
        return ",".join(self.data or [])


class OptionalBooleanField(BooleanField):
    """A boolean that stays None when the key is absent from the body."""

    def process_data(self, value):
        self.data = None if value is None else bool(value)

    def process_formdata(self, valuelist):
        if not valuelist:
            self.data = None
            return
        super().process_formdata(valuelist)


def submitted(field):
    """The field's value, or None when the body did not include it."""
    return field.data if getattr(field, "raw_data", None) else None


def validate_form(form):
    """Validate ``form`` or raise ``ValidationError`` with its first error."""
    if not form.validate():
        field_name, errors = next(iter(form.errors.items()))
        raise ValidationError(f"{field_name}: {errors[0]}")
    return form
