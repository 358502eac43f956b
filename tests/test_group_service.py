"""Tests for GroupService."""

from __future__ import annotations

import random
import unittest

from huddle.chat.models import Chat
from huddle.core.constants import (
    GROUP_MAX_MEMBERS,
    ROLE_ADMIN,
    ROLE_MEMBER,
    ROLE_SUB_ADMIN,
)
from huddle.errors import (
    AllAlreadyMembers,
    AlreadyMember,
    AlreadySubAdmin,
    AppError,
    ForbiddenError,
    GroupFull,
    InvalidRole,
    NotFoundError,
    NotMember,
    SelfRoleChange,
    ValidationError,
)
from huddle.group.models import Group
from huddle.group.services import GroupService
from tests.conftest import make_store


class TestCreateGroup(unittest.TestCase):
    def setUp(self) -> None:
        self.store = make_store("alice", "bob", "carol")

    def test_create_group(self) -> None:
        group = GroupService.create_group(
            self.store, "alice", "  Pickup  ", ["bob", "carol", "bob"]
        )

        stored = GroupService.get_group(self.store, group.id)
        self.assertEqual(stored.name, "Pickup")
        self.assertEqual(stored.admin_id, "alice")
        self.assertEqual(stored.roster.member_ids, ["alice", "bob", "carol"])
        self.assertTrue(stored.auto_member_approval)
        doc = self.store.client.collection("groups").document(group.id).get().to_dict()
        self.assertEqual(doc["memberCount"], 3)

    def test_create_group_also_creates_its_chat(self) -> None:
        group = GroupService.create_group(self.store, "alice", "Pickup", ["bob"])

        chat = self.store.get(Chat, group.id)
        self.assertIsNotNone(chat)
        assert chat is not None
        self.assertTrue(chat.is_group)
        self.assertEqual(chat.group_id, group.id)

    def test_name_rules(self) -> None:
        GroupService.create_group(self.store, "alice", "x" * 30, ["bob"])
        with self.assertRaises(ValidationError):
            GroupService.create_group(self.store, "alice", "x" * 31, ["bob"])
        with self.assertRaises(ValidationError):
            GroupService.create_group(self.store, "alice", "   ", ["bob"])

    def test_needs_two_members(self) -> None:
        with self.assertRaises(ValidationError):
            GroupService.create_group(self.store, "alice", "Solo")
        with self.assertRaises(ValidationError):
            GroupService.create_group(self.store, "alice", "Solo", ["alice"])

    def test_members_must_exist(self) -> None:
        with self.assertRaises(NotFoundError):
            GroupService.create_group(self.store, "alice", "Pickup", ["ghost"])

    def test_capacity(self) -> None:
        too_many = [f"user{i}" for i in range(GROUP_MAX_MEMBERS)]
        with self.assertRaises(GroupFull):
            GroupService.create_group(self.store, "alice", "Crowd", too_many)


class TestMembership(unittest.TestCase):
    def setUp(self) -> None:
        self.store = make_store("alice", "bob", "carol", "dave", "erin")
        self.group = GroupService.create_group(self.store, "alice", "Pickup", ["bob"])

    def test_add_members(self) -> None:
        group = GroupService.add_members(
            self.store, "alice", self.group.id, ["bob", "carol", "dave"]
        )

        self.assertEqual(group.roster.member_ids, ["alice", "bob", "carol", "dave"])
        self.assertEqual(group.member_count, 4)

    def test_add_only_existing_members(self) -> None:
        with self.assertRaises(AllAlreadyMembers):
            GroupService.add_members(self.store, "alice", self.group.id, ["bob"])

    def test_regular_members_cannot_add(self) -> None:
        with self.assertRaises(ForbiddenError):
            GroupService.add_members(self.store, "bob", self.group.id, ["carol"])

    def test_sub_admin_can_add_and_remove(self) -> None:
        GroupService.change_role(
            self.store, "alice", self.group.id, "bob", ROLE_SUB_ADMIN
        )

        GroupService.add_members(self.store, "bob", self.group.id, ["carol"])
        group = GroupService.remove_member(self.store, "bob", self.group.id, "carol")

        assert group is not None
        self.assertEqual(group.roster.member_ids, ["alice", "bob"])

    def test_nobody_removes_the_admin(self) -> None:
        GroupService.change_role(
            self.store, "alice", self.group.id, "bob", ROLE_SUB_ADMIN
        )
        with self.assertRaises(ForbiddenError):
            GroupService.remove_member(self.store, "bob", self.group.id, "alice")

    def test_regular_members_cannot_remove_others(self) -> None:
        GroupService.add_members(self.store, "alice", self.group.id, ["carol"])
        with self.assertRaises(ForbiddenError):
            GroupService.remove_member(self.store, "bob", self.group.id, "carol")

    def test_regular_members_cannot_learn_who_is_a_member(self) -> None:
        for target in ["alice", "carol"]:
            with self.assertRaises(ForbiddenError):
                GroupService.remove_member(self.store, "bob", self.group.id, target)

    def test_member_leaves(self) -> None:
        group = GroupService.remove_member(self.store, "bob", self.group.id, "bob")

        assert group is not None
        self.assertEqual(group.roster.member_ids, ["alice"])
        self.assertEqual(GroupService.get_user_groups(self.store, "bob"), [])

    def test_remove_non_member(self) -> None:
        with self.assertRaises(NotMember):
            GroupService.remove_member(self.store, "alice", self.group.id, "carol")

    def test_add_beyond_capacity(self) -> None:
        group = self.store.get(Group, self.group.id)
        assert group is not None
        group.roster.add(f"user{i}" for i in range(GROUP_MAX_MEMBERS - 2))
        self.store.put(group)

        with self.assertRaises(GroupFull):
            GroupService.add_members(self.store, "alice", self.group.id, ["carol"])

    def test_user_groups(self) -> None:
        other = GroupService.create_group(self.store, "carol", "Other", ["bob"])

        groups = GroupService.get_user_groups(self.store, "bob")

        self.assertEqual({g.id for g in groups}, {self.group.id, other.id})

    def test_update_group(self) -> None:
        group = GroupService.update_group(
            self.store,
            "alice",
            self.group.id,
            name="Renamed",
            auto_member_approval=False,
        )

        self.assertEqual(group.name, "Renamed")
        stored = GroupService.get_group(self.store, self.group.id)
        self.assertFalse(stored.auto_member_approval)
        with self.assertRaises(ForbiddenError):
            GroupService.update_group(self.store, "bob", self.group.id, name="Mine")


class TestAdminSuccession(unittest.TestCase):
    def setUp(self) -> None:
        self.store = make_store("a", "b", "c", "d")

    def test_sub_admin_takes_over(self) -> None:
        group = GroupService.create_group(self.store, "a", "Club", ["b", "c", "d"])
        GroupService.change_role(self.store, "a", group.id, "c", ROLE_SUB_ADMIN)

        updated = GroupService.remove_member(self.store, "a", group.id, "a")

        assert updated is not None
        stored = GroupService.get_group(self.store, group.id)
        self.assertEqual(stored.admin_id, "c")
        self.assertEqual(stored.roster.sub_admin_ids, [])
        self.assertEqual(stored.roster.member_ids, ["b", "c", "d"])
        self.assertEqual(stored.member_count, 3)

    def test_first_member_takes_over(self) -> None:
        group = GroupService.create_group(self.store, "b", "Club", ["a", "c"])

        GroupService.remove_member(self.store, "b", group.id, "b")

        stored = GroupService.get_group(self.store, group.id)
        self.assertEqual(stored.admin_id, "a")
        self.assertEqual(stored.roster.member_ids, ["a", "c"])

    def test_sole_admin_leaving_dissolves_group(self) -> None:
        group = GroupService.create_group(self.store, "a", "Club", ["b"])
        GroupService.remove_member(self.store, "b", group.id, "b")

        result = GroupService.remove_member(self.store, "a", group.id, "a")

        self.assertIsNone(result)
        self.assertIsNone(self.store.get(Chat, group.id))
        with self.assertRaises(NotFoundError):
            GroupService.get_group(self.store, group.id)


class TestChangeRole(unittest.TestCase):
    def setUp(self) -> None:
        self.store = make_store("a", "b", "c")
        self.group = GroupService.create_group(self.store, "a", "Club", ["b", "c"])

    def _change(self, acting: str, target: str, role: str) -> Group:
        return GroupService.change_role(self.store, acting, self.group.id, target, role)

    def test_promote_and_demote(self) -> None:
        group = self._change("a", "b", ROLE_SUB_ADMIN)
        self.assertEqual(group.roster.sub_admin_ids, ["b"])

        with self.assertRaises(AlreadySubAdmin):
            self._change("a", "b", ROLE_SUB_ADMIN)

        group = self._change("a", "b", ROLE_MEMBER)
        self.assertEqual(group.roster.sub_admin_ids, [])

        with self.assertRaises(AlreadyMember):
            self._change("a", "b", ROLE_MEMBER)

    def test_transfer_admin(self) -> None:
        group = self._change("a", "c", ROLE_ADMIN)

        self.assertEqual(group.admin_id, "c")
        self.assertEqual(group.roster.sub_admin_ids, ["a"])
        stored = GroupService.get_group(self.store, self.group.id)
        self.assertEqual(stored.admin_id, "c")

    def test_only_admin_changes_roles(self) -> None:
        self._change("a", "b", ROLE_SUB_ADMIN)
        with self.assertRaises(ForbiddenError):
            self._change("b", "c", ROLE_SUB_ADMIN)

    def test_invalid_requests(self) -> None:
        with self.assertRaises(InvalidRole):
            self._change("a", "b", "owner")
        with self.assertRaises(SelfRoleChange):
            self._change("a", "a", ROLE_MEMBER)
        with self.assertRaises(NotMember):
            self._change("a", "z", ROLE_MEMBER)


class TestMemberCountInvariant(unittest.TestCase):
    """memberCount must equal len(memberIds) after any sequence of operations."""

    def test_random_operation_sequences(self) -> None:
        users = [f"u{i}" for i in range(8)]
        rng = random.Random(7)

        for _ in range(5):
            store = make_store(*users)
            group = GroupService.create_group(store, "u0", "Random", ["u1"])
            for _ in range(30):
                current = GroupService.get_group(store, group.id)
                actor = current.admin_id
                target = rng.choice(users)
                operation = rng.choice(["add", "remove", "leave", "role"])
                try:
                    if operation == "add":
                        GroupService.add_members(store, actor, group.id, [target])
                    elif operation == "remove":
                        GroupService.remove_member(store, actor, group.id, target)
                    elif operation == "leave":
                        GroupService.remove_member(store, target, group.id, target)
                    else:
                        role = rng.choice([ROLE_ADMIN, ROLE_SUB_ADMIN, ROLE_MEMBER])
                        GroupService.change_role(store, actor, group.id, target, role)
                except AppError:
                    pass

                doc = store.client.collection("groups").document(group.id).get()
                if not doc.exists:
                    break
                data = doc.to_dict()
                self.assertEqual(data["memberCount"], len(data["memberIds"]))
                self.assertIn(data["adminId"], data["memberIds"])
                self.assertEqual(len(set(data["memberIds"])), len(data["memberIds"]))


if __name__ == "__main__":
    unittest.main()
