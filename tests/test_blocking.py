"""Tests for blocking users."""

import unittest

from huddle.core.constants import FRIENDSHIP_BLOCKED, FRIENDSHIP_NONE
from huddle.errors import AlreadyBlocked, Blocked, NotFoundError, SelfRequest
from huddle.friend.models import Block, FriendRequest, Friendship
from huddle.friend.services import FriendService
from tests.conftest import make_store


class TestBlocking(unittest.TestCase):
    def setUp(self):
        self.store = make_store("alice", "bob", "carol")

    def test_block_removes_friendship_and_pending_requests(self):
        self.store.put(Friendship.between("alice", "bob"))
        request = FriendService.send_friend_request(self.store, "alice", "carol")
        reverse = FriendService.send_friend_request(self.store, "carol", "bob")

        FriendService.block_user(self.store, "bob", "alice")
        FriendService.block_user(self.store, "carol", "alice")

        self.assertIsNone(FriendService.get_friendship(self.store, "alice", "bob"))
        self.assertIsNone(self.store.get(FriendRequest, request.id))
        self.assertIsNotNone(self.store.get(FriendRequest, reverse.id))
        self.assertIsNotNone(self.store.get(Block, "bob_alice"))

    def test_blocked_pair_cannot_send_requests_either_way(self):
        FriendService.block_user(self.store, "alice", "bob")

        with self.assertRaises(Blocked):
            FriendService.send_friend_request(self.store, "bob", "alice")
        with self.assertRaises(Blocked):
            FriendService.send_friend_request(self.store, "alice", "bob")

    def test_block_twice(self):
        FriendService.block_user(self.store, "alice", "bob")
        with self.assertRaises(AlreadyBlocked):
            FriendService.block_user(self.store, "alice", "bob")

    def test_cannot_block_self_or_unknown_user(self):
        with self.assertRaises(SelfRequest):
            FriendService.block_user(self.store, "alice", "alice")
        with self.assertRaises(NotFoundError):
            FriendService.block_user(self.store, "alice", "ghost")

    def test_unblock(self):
        self.store.put(Friendship.between("alice", "bob"))
        FriendService.block_user(self.store, "alice", "bob")
        self.assertEqual(
            FriendService.get_friendship_status(self.store, "bob", "alice"),
            FRIENDSHIP_BLOCKED,
        )

        FriendService.unblock_user(self.store, "alice", "bob")

        self.assertEqual(
            FriendService.get_friendship_status(self.store, "bob", "alice"),
            FRIENDSHIP_NONE,
        )
        FriendService.send_friend_request(self.store, "bob", "alice")

    def test_only_the_blocker_can_unblock(self):
        FriendService.block_user(self.store, "alice", "bob")
        with self.assertRaises(NotFoundError):
            FriendService.unblock_user(self.store, "bob", "alice")

    def test_blocked_ids_cover_both_directions(self):
        FriendService.block_user(self.store, "alice", "bob")
        FriendService.block_user(self.store, "carol", "alice")

        self.assertEqual(
            FriendService.get_blocked_ids(self.store, "alice"), {"bob", "carol"}
        )
        self.assertTrue(FriendService.is_blocked_between(self.store, "bob", "alice"))

    def test_block_ids_with_underscores_do_not_collide(self):
        store = make_store("a_b", "c", "a", "b_c")
        FriendService.block_user(store, "a_b", "c")

        self.assertFalse(FriendService.is_blocked_between(store, "a", "b_c"))
        FriendService.block_user(store, "a", "b_c")
        self.assertEqual(FriendService.get_blocked_ids(store, "a"), {"b_c"})


if __name__ == "__main__":
    unittest.main()
