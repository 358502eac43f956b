"""User lookups shared by the friend and group services."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from huddle.errors import NotFoundError

from .models import UserProfile

if TYPE_CHECKING:
    from huddle.store import RelationshipStore


def get_user(store: RelationshipStore, user_id: str) -> UserProfile | None:
    """Fetch a user profile, or None when the user does not exist."""
    return store.get(UserProfile, user_id)


def require_user(store: RelationshipStore, user_id: str) -> UserProfile:
    """Fetch a user profile or raise ``NotFoundError``."""
    user = get_user(store, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user


def require_users(
    store: RelationshipStore, user_ids: Iterable[str]
) -> list[UserProfile]:
    """Fetch every listed user, failing if any one of them is missing."""
    wanted = list(dict.fromkeys(user_ids))
    users = store.get_many(UserProfile, wanted)
    found = {user.id for user in users}
    missing = [uid for uid in wanted if uid not in found]
    if missing:
        raise NotFoundError(f"User(s) not found: {', '.join(missing)}.")
    return users


def get_user_map(
    store: RelationshipStore, user_ids: Iterable[str]
) -> dict[str, UserProfile]:
    """Batch fetch users into an id-keyed map, skipping dangling ids."""
    return {user.id: user for user in store.get_many(UserProfile, user_ids)}
