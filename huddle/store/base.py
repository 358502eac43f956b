"""The relationship store contract used by every service."""

from __future__ import annotations

import abc
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from huddle.core.types import R, Record

EQUAL = "=="
ARRAY_CONTAINS = "array_contains"
SUPPORTED_OPERATORS = (EQUAL, ARRAY_CONTAINS)


@dataclass(frozen=True)
class Filter:
    """A single ``field op value`` condition of a store query."""

    field: str
    op: str
    value: Any

    def __post_init__(self) -> None:
        if self.op not in SUPPORTED_OPERATORS:
            raise ValueError(f"Unsupported filter operator: {self.op!r}")


def eq(field: str, value: Any) -> Filter:
    """Match documents whose ``field`` equals ``value``."""
    return Filter(field, EQUAL, value)


def contains(field: str, value: Any) -> Filter:
    """Match documents whose array ``field`` holds ``value``."""
    return Filter(field, ARRAY_CONTAINS, value)


@dataclass(frozen=True)
class Put:
    """Create or overwrite a whole document."""

    record: Record


@dataclass(frozen=True)
class Update:
    """Merge ``fields`` into an existing document."""

    model: type[Record]
    doc_id: str
    fields: dict[str, Any]


@dataclass(frozen=True)
class Delete:
    """Remove a document."""

    model: type[Record]
    doc_id: str


WriteOp = Union[Put, Update, Delete]


class RelationshipStore(abc.ABC):
    """Point reads, simple filtered queries and all-or-nothing writes."""

    @abc.abstractmethod
    def get(self, model: type[R], doc_id: str) -> Optional[R]:
        """Return the record stored under ``doc_id`` or None."""

    def get_many(self, model: type[R], doc_ids: Iterable[str]) -> list[R]:
        """Return the existing records among ``doc_ids``, in request order."""
        records = []
        for doc_id in dict.fromkeys(doc_ids):
            record = self.get(model, doc_id)
            if record is not None:
                records.append(record)
        return records

    @abc.abstractmethod
    def query(
        self,
        model: type[R],
        filters: Sequence[Filter] = (),
        limit: Optional[int] = None,
    ) -> list[R]:
        """Return the records matching every filter."""

    @abc.abstractmethod
    def new_id(self, model: type[Record]) -> str:
        """Allocate a fresh document id in the model's collection."""

    @abc.abstractmethod
    def put(self, record: Record) -> None:
        """Create or overwrite a document."""

    @abc.abstractmethod
    def update(self, model: type[Record], doc_id: str, fields: dict[str, Any]) -> None:
        """Merge fields into an existing document."""

    @abc.abstractmethod
    def delete(self, model: type[Record], doc_id: str) -> None:
        """Remove a document."""

    @abc.abstractmethod
    def atomic_batch(self, operations: Sequence[WriteOp]) -> None:
        """Apply every operation or none of them."""
