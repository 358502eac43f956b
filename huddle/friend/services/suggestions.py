"""Friend-of-friend suggestions ranked by mutual friend count."""

from __future__ import annotations

import abc
from collections import Counter
from typing import TYPE_CHECKING

from huddle.core.constants import (
    DEFAULT_SUGGESTION_LIMIT,
    NEW_USER_SUGGESTION_REASON,
    STATUS_PENDING,
)
from huddle.errors import ValidationError
from huddle.store import eq
from huddle.user.models import UserProfile
from huddle.user.services import get_user_map

from ..models import FriendRequest, FriendSuggestion
from .friendship import get_blocked_ids, get_friend_ids

if TYPE_CHECKING:
    from huddle.store import RelationshipStore


class FriendGraph(abc.ABC):
    """Adjacency lookups used by the ranker.

    The default implementation walks friendship documents on every call; a
    precomputed adjacency index can be swapped in without touching ranking.
    """

    @abc.abstractmethod
    def friends_of(self, user_id: str) -> set[str]:
        """Return the ids of the user's current friends."""


class StoreFriendGraph(FriendGraph):
    """Friend graph read straight from the friendships collection."""

    def __init__(self, store: RelationshipStore) -> None:
        self.store = store

    def friends_of(self, user_id: str) -> set[str]:
        return get_friend_ids(self.store, user_id)


def mutual_friends_reason(count: int) -> str:
    return f"{count} mutual friend{'s' if count != 1 else ''}"


def _pending_outgoing_ids(store: RelationshipStore, user_id: str) -> set[str]:
    requests = store.query(
        FriendRequest, [eq("from", user_id), eq("status", STATUS_PENDING)]
    )
    return {request.to_user for request in requests}


def rank_candidates(
    graph: FriendGraph, friend_ids: set[str], excluded: set[str]
) -> list[tuple[str, int]]:
    """Count how many of ``friend_ids`` know each candidate.

    Returns ``(candidate_id, mutual_count)`` pairs, highest count first and
    ties broken by candidate id.
    """
    mutual_counts: Counter[str] = Counter()
    for friend_id in sorted(friend_ids):
        for candidate_id in graph.friends_of(friend_id):
            if candidate_id not in excluded:
                mutual_counts[candidate_id] += 1
    return sorted(mutual_counts.items(), key=lambda item: (-item[1], item[0]))


def _suggest_new_users(
    store: RelationshipStore, user_id: str, limit: int, excluded: set[str]
) -> list[FriendSuggestion]:
    """Suggest arbitrary active users to someone with no friends yet."""
    # Over-fetch so that excluded users do not starve the page
    users = store.query(
        UserProfile,
        [eq("isActive", True), eq("isLocked", False)],
        limit=limit + len(excluded) + 1,
    )
    suggestions = []
    for user in users:
        if user.id == user_id or user.id in excluded or not user.is_suggestible:
            continue
        suggestions.append(
            FriendSuggestion(
                user=user, mutual_friends=0, reason=NEW_USER_SUGGESTION_REASON
            )
        )
    return suggestions[:limit]


def suggest_friends(
    store: RelationshipStore,
    user_id: str,
    limit: int = DEFAULT_SUGGESTION_LIMIT,
    graph: FriendGraph | None = None,
) -> list[FriendSuggestion]:
    """Suggest people the user may know.

    Never returns the user, a current friend, someone the user already has a
    pending request out to, or anyone on either side of a block.
    """
    if limit < 1:
        raise ValidationError("Suggestion limit must be at least 1.")

    graph = graph or StoreFriendGraph(store)
    friend_ids = graph.friends_of(user_id)
    excluded = (
        {user_id}
        | friend_ids
        | _pending_outgoing_ids(store, user_id)
        | get_blocked_ids(store, user_id)
    )

    if not friend_ids:
        return _suggest_new_users(store, user_id, limit, excluded)

    ranked = rank_candidates(graph, friend_ids, excluded)
    users = get_user_map(store, [candidate_id for candidate_id, _ in ranked])

    suggestions = []
    for candidate_id, count in ranked:
        user = users.get(candidate_id)
        if user is None or not user.is_suggestible:
            continue
        suggestions.append(
            FriendSuggestion(
                user=user, mutual_friends=count, reason=mutual_friends_reason(count)
            )
        )
        if len(suggestions) >= limit:
            break
    return suggestions
