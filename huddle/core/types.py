"""Core data types for the huddle application."""

from __future__ import annotations

import datetime
from typing import Any, ClassVar, Dict, Optional, TypedDict, TypeVar  # noqa: UP035

R = TypeVar("R", bound="Record")


class Record:
    """Base class for typed documents exchanged with the relationship store.

    Subclasses are dataclasses bound to a single collection. They convert
    to and from the raw document mapping so that untyped data never leaves
    the store layer.
    """

    COLLECTION: ClassVar[str] = ""

    id: str

    @classmethod
    def from_document(cls: type[R], doc_id: str, data: dict[str, Any]) -> R:
        """Build the record from a stored document."""
        raise NotImplementedError

    def to_document(self) -> dict[str, Any]:
        """Serialize the record to a storable document (without its id)."""
        raise NotImplementedError


def compose_id(*parts: str) -> str:
    """Join ids into one document id that no other tuple of ids maps to.

    ``%`` and ``_`` inside each part are percent-escaped so ``_`` only ever
    separates parts. Ids without either character are joined unchanged.
    """
    return "_".join(part.replace("%", "%25").replace("_", "%5F") for part in parts)


def utcnow() -> datetime.datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def as_datetime(value: Any) -> Optional[datetime.datetime]:
    """Coerce a stored timestamp into a datetime.

    Firestore hands back ``DatetimeWithNanoseconds`` (a datetime subclass);
    older documents may carry ISO strings.
    """
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value
    if isinstance(value, str):
        return datetime.datetime.fromisoformat(value)
    to_datetime = getattr(value, "to_datetime", None)
    if callable(to_datetime):
        return to_datetime()
    raise TypeError(f"Unsupported timestamp value: {value!r}")


class APIResponse(TypedDict):
    """Generic API response structure."""

    success: bool
    message: str
    data: Optional[Dict[str, Any]]  # noqa: UP006
