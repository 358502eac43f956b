"""Common utilities for tests."""

from __future__ import annotations

import unittest.mock
from typing import Any, Optional

from mockfirestore import CollectionReference, MockFirestore, Query

from huddle.store import FirestoreRelationshipStore


def patch_mockfirestore() -> None:
    """Apply monkeypatches to mockfirestore to support FieldFilter and get_all."""

    def collection_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(CollectionReference, "_where"):
        CollectionReference._where = CollectionReference.where
        CollectionReference.where = collection_where

    def query_where(
        self: Any,
        field_path: Optional[str] = None,
        op_string: Optional[str] = None,
        value: Any = None,
        filter: Any = None,
    ) -> Any:
        if filter:
            return self._where(filter.field_path, filter.op_string, filter.value)
        return self._where(field_path, op_string, value)

    if not hasattr(Query, "_where"):
        Query._where = Query.where
        Query.where = query_where

    def get_all(self: Any, references: Any, *args: Any, **kwargs: Any) -> list[Any]:
        return [ref.get() for ref in references]

    MockFirestore.get_all = get_all


class MockBatch:
    """Write batch that applies its operations to a MockFirestore on commit."""

    def __init__(self, db: Any) -> None:
        self.db = db
        self.writes: list[tuple[str, Any, Any]] = []
        self.commit = unittest.mock.MagicMock(side_effect=self._real_commit)

    def update(self, ref: Any, data: Any) -> None:
        self.writes.append(("update", ref, data))

    def set(self, ref: Any, data: Any, merge: bool = False) -> None:
        self.writes.append(("set", ref, data))

    def delete(self, ref: Any) -> None:
        self.writes.append(("delete", ref, None))

    def _real_commit(self) -> None:
        for action, ref, data in self.writes:
            if action == "set":
                ref.set(data)
            elif action == "update":
                ref.update(data)
            elif ref.get().exists:
                ref.delete()
        self.writes = []


def make_db() -> MockFirestore:
    """A MockFirestore with query filters and write batches wired up."""
    patch_mockfirestore()
    db = MockFirestore()
    db.batch = lambda: MockBatch(db)
    return db


def seed_users(db: Any, *user_ids: str, **overrides: dict[str, Any]) -> None:
    """Create active user documents; ``overrides`` maps an id to extra fields."""
    for user_id in user_ids:
        data = {"displayName": user_id.title(), "isActive": True, "isLocked": False}
        data.update(overrides.get(user_id, {}))
        db.collection("users").document(user_id).set(data)


def make_store(
    *user_ids: str, **overrides: dict[str, Any]
) -> FirestoreRelationshipStore:
    """Build a relationship store on a fresh MockFirestore seeded with users."""
    db = make_db()
    seed_users(db, *user_ids, **overrides)
    return FirestoreRelationshipStore(db)
