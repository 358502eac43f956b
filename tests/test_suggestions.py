"""Tests for friend suggestions."""

from __future__ import annotations

import unittest

from huddle.core.constants import NEW_USER_SUGGESTION_REASON
from huddle.errors import ValidationError
from huddle.friend.models import Friendship
from huddle.friend.services import FriendGraph, FriendService
from huddle.friend.services.suggestions import mutual_friends_reason, rank_candidates
from tests.conftest import make_store


class DictFriendGraph(FriendGraph):
    """Adjacency held in memory, as a precomputed index would be."""

    def __init__(self, edges: dict[str, set[str]]) -> None:
        self.edges = edges

    def friends_of(self, user_id: str) -> set[str]:
        return self.edges.get(user_id, set())


class TestSuggestFriends(unittest.TestCase):
    def setUp(self) -> None:
        self.store = make_store("u", "a", "b", "c", "d", "e")
        for pair in [("u", "a"), ("u", "b"), ("a", "c"), ("b", "c"), ("a", "d")]:
            self.store.put(Friendship.between(*pair))

    def test_ranked_by_mutual_friends(self) -> None:
        suggestions = FriendService.suggest_friends(self.store, "u")

        self.assertEqual([s.user.id for s in suggestions], ["c", "d"])
        self.assertEqual(suggestions[0].mutual_friends, 2)
        self.assertEqual(suggestions[0].reason, "2 mutual friends")
        self.assertEqual(suggestions[1].reason, "1 mutual friend")

    def test_never_suggests_self_or_friends(self) -> None:
        suggested = {s.user.id for s in FriendService.suggest_friends(self.store, "u")}
        self.assertTrue(suggested.isdisjoint({"u", "a", "b"}))

    def test_excludes_pending_outgoing_requests(self) -> None:
        FriendService.send_friend_request(self.store, "u", "c")

        suggested = [s.user.id for s in FriendService.suggest_friends(self.store, "u")]

        self.assertEqual(suggested, ["d"])

    def test_excludes_blocked_users(self) -> None:
        FriendService.block_user(self.store, "d", "u")

        suggested = [s.user.id for s in FriendService.suggest_friends(self.store, "u")]

        self.assertEqual(suggested, ["c"])

    def test_skips_inactive_and_locked_users(self) -> None:
        store = make_store(
            "u", "a", "c", "d", c={"isActive": False}, d={"isLocked": True}
        )
        for pair in [("u", "a"), ("a", "c"), ("a", "d")]:
            store.put(Friendship.between(*pair))

        self.assertEqual(FriendService.suggest_friends(store, "u"), [])

    def test_limit(self) -> None:
        suggestions = FriendService.suggest_friends(self.store, "u", limit=1)
        self.assertEqual([s.user.id for s in suggestions], ["c"])

        with self.assertRaises(ValidationError):
            FriendService.suggest_friends(self.store, "u", limit=0)

    def test_new_user_gets_active_users(self) -> None:
        suggestions = FriendService.suggest_friends(self.store, "e")

        suggested = {s.user.id for s in suggestions}
        self.assertEqual(suggested, {"u", "a", "b", "c", "d"})
        for suggestion in suggestions:
            self.assertEqual(suggestion.reason, NEW_USER_SUGGESTION_REASON)
            self.assertEqual(suggestion.mutual_friends, 0)

    def test_locked_users_do_not_crowd_out_new_user_suggestions(self) -> None:
        locked = {"isLocked": True}
        store = make_store(
            "u", "l1", "l2", "l3", "zz", l1=locked, l2=locked, l3=locked
        )

        suggestions = FriendService.suggest_friends(store, "u", limit=1)

        self.assertEqual([s.user.id for s in suggestions], ["zz"])

    def test_custom_friend_graph(self) -> None:
        graph = DictFriendGraph({"u": {"a"}, "a": {"u", "e"}})

        suggestions = FriendService.suggest_friends(self.store, "u", graph=graph)

        self.assertEqual([s.user.id for s in suggestions], ["e"])


class TestRanking(unittest.TestCase):
    def test_ties_are_broken_by_id(self) -> None:
        graph = DictFriendGraph({"a": {"y", "x"}, "b": {"x", "y", "z"}})

        ranked = rank_candidates(graph, {"a", "b"}, excluded=set())

        self.assertEqual(ranked, [("x", 2), ("y", 2), ("z", 1)])

    def test_reason_wording(self) -> None:
        self.assertEqual(mutual_friends_reason(1), "1 mutual friend")
        self.assertEqual(mutual_friends_reason(3), "3 mutual friends")


if __name__ == "__main__":
    unittest.main()
