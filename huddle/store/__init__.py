"""Document store access for the social graph."""

from flask import current_app, g

from .base import (
    ARRAY_CONTAINS,
    EQUAL,
    Delete,
    Filter,
    Put,
    RelationshipStore,
    Update,
    WriteOp,
    contains,
    eq,
)
from .firestore import FirestoreRelationshipStore


def get_store() -> RelationshipStore:
    """Return the request's relationship store, creating it on first use.

    Tests may install their own store under ``app.extensions["huddle.store"]``.
    """
    if "store" not in g:
        store = current_app.extensions.get("huddle.store")
        g.store = store or FirestoreRelationshipStore.from_app()
    return g.store


__all__ = [
    "ARRAY_CONTAINS",
    "EQUAL",
    "Delete",
    "Filter",
    "FirestoreRelationshipStore",
    "Put",
    "RelationshipStore",
    "Update",
    "WriteOp",
    "contains",
    "eq",
    "get_store",
]
