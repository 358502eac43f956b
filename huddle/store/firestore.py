"""Firestore implementation of the relationship store."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Optional

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions

from huddle.core.constants import FIRESTORE_BATCH_LIMIT
from huddle.errors import StoreError

from .base import Delete, Filter, Put, RelationshipStore, Update, WriteOp

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client
    from google.cloud.firestore_v1.document import DocumentReference

    from huddle.core.types import R, Record

logger = logging.getLogger(__name__)


@contextmanager
def _store_call(action: str) -> Iterator[None]:
    """Translate Google API failures into ``StoreError``."""
    try:
        yield
    except google_exceptions.GoogleAPICallError as e:
        logger.error(f"Firestore {action} failed: {e}")
        raise StoreError() from e


class FirestoreRelationshipStore(RelationshipStore):
    """Relationship store backed by a Firestore client."""

    def __init__(self, client: Client) -> None:
        self.client = client

    @classmethod
    def from_app(cls) -> FirestoreRelationshipStore:
        """Build a store on the default Firebase app's Firestore client."""
        return cls(firestore.client())

    def _ref(self, model: type[Record], doc_id: str) -> DocumentReference:
        return self.client.collection(model.COLLECTION).document(doc_id)

    def get(self, model: type[R], doc_id: str) -> Optional[R]:
        """Return the record stored under ``doc_id`` or None."""
        if not doc_id:
            return None
        with _store_call(f"get {model.COLLECTION}/{doc_id}"):
            snapshot = self._ref(model, doc_id).get()
        if not snapshot.exists:
            return None
        return model.from_document(snapshot.id, snapshot.to_dict() or {})

    def get_many(self, model: type[R], doc_ids: Iterable[str]) -> list[R]:
        """Fetch several documents in one round-trip, keeping request order."""
        unique_ids = [doc_id for doc_id in dict.fromkeys(doc_ids) if doc_id]
        if not unique_ids:
            return []

        refs = [self._ref(model, doc_id) for doc_id in unique_ids]
        with _store_call(f"get_all {model.COLLECTION}"):
            snapshots = {doc.id: doc for doc in self.client.get_all(refs) if doc.exists}
        return [
            model.from_document(doc_id, snapshots[doc_id].to_dict() or {})
            for doc_id in unique_ids
            if doc_id in snapshots
        ]

    def query(
        self,
        model: type[R],
        filters: Sequence[Filter] = (),
        limit: Optional[int] = None,
    ) -> list[R]:
        """Return the records matching every filter."""
        query: Any = self.client.collection(model.COLLECTION)
        for condition in filters:
            query = query.where(
                filter=firestore.FieldFilter(
                    condition.field, condition.op, condition.value
                )
            )
        if limit:
            query = query.limit(limit)

        with _store_call(f"query {model.COLLECTION}"):
            docs = list(query.stream())
        return [model.from_document(doc.id, doc.to_dict() or {}) for doc in docs]

    def new_id(self, model: type[Record]) -> str:
        """Allocate a fresh document id in the model's collection."""
        return self.client.collection(model.COLLECTION).document().id

    def put(self, record: Record) -> None:
        """Create or overwrite a document."""
        with _store_call(f"set {record.COLLECTION}/{record.id}"):
            self._ref(type(record), record.id).set(record.to_document())

    def update(self, model: type[Record], doc_id: str, fields: dict[str, Any]) -> None:
        """Merge fields into an existing document."""
        with _store_call(f"update {model.COLLECTION}/{doc_id}"):
            self._ref(model, doc_id).update(fields)

    def delete(self, model: type[Record], doc_id: str) -> None:
        """Remove a document."""
        with _store_call(f"delete {model.COLLECTION}/{doc_id}"):
            self._ref(model, doc_id).delete()

    def atomic_batch(self, operations: Sequence[WriteOp]) -> None:
        """Commit every operation in a single Firestore write batch."""
        if not operations:
            return
        if len(operations) > FIRESTORE_BATCH_LIMIT:
            raise StoreError(
                f"Atomic batch of {len(operations)} writes exceeds the "
                f"limit of {FIRESTORE_BATCH_LIMIT}."
            )

        batch = self.client.batch()
        for op in operations:
            if isinstance(op, Put):
                ref = self._ref(type(op.record), op.record.id)
                batch.set(ref, op.record.to_document())
            elif isinstance(op, Update):
                batch.update(self._ref(op.model, op.doc_id), op.fields)
            elif isinstance(op, Delete):
                batch.delete(self._ref(op.model, op.doc_id))
            else:
                raise TypeError(f"Unknown write operation: {op!r}")

        with _store_call(f"batch commit of {len(operations)} writes"):
            batch.commit()
