"""Tests for userapi.services.user_store against an in-memory sqlite database."""

import unittest

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from userapi.services.user_store import UserStore

from tests.helpers import make_session_factory


def _fields(**overrides: str) -> dict[str, str]:
    fields = {
        "user_name": "alice",
        "email": "alice@example.com",
        "password": "$2b$04$hash",
        "role": "user",
    }
    fields.update(overrides)
    return fields


class TestUserStore(unittest.TestCase):
    def setUp(self) -> None:
        self.session = make_session_factory()()
        self.store = UserStore(self.session)

    def tearDown(self) -> None:
        self.session.close()

    def test_create_assigns_id(self) -> None:
        user = self.store.create(_fields())
        self.assertEqual(len(user.id), 32)
        self.assertEqual(self.store.find_by_id(user.id).email, "alice@example.com")

    def test_find_returns_all_and_missing_id_is_none(self) -> None:
        self.store.create(_fields())
        self.store.create(_fields(user_name="bob", email="bob@example.com"))
        self.assertEqual(sorted(u.user_name for u in self.store.find()), ["alice", "bob"])
        self.assertIsNone(self.store.find_by_id("does-not-exist"))

    def test_find_by_email(self) -> None:
        created = self.store.create(_fields())
        self.assertEqual(self.store.find_by_email("alice@example.com").id, created.id)
        self.assertIsNone(self.store.find_by_email("nobody@example.com"))

    def test_update_returns_post_update_record(self) -> None:
        created = self.store.create(_fields())
        updated = self.store.update_by_id(created.id, {"user_name": "alice2"})
        self.assertEqual(updated.user_name, "alice2")
        self.assertEqual(updated.email, "alice@example.com")

    def test_update_missing_is_none(self) -> None:
        self.assertIsNone(self.store.update_by_id("missing", {"user_name": "x"}))

    def test_delete_returns_removed_record(self) -> None:
        user_id = self.store.create(_fields()).id
        removed = self.store.delete_by_id(user_id)
        self.assertEqual((removed.id, removed.user_name), (user_id, "alice"))
        self.assertIsNone(self.store.find_by_id(user_id))
        self.assertIsNone(self.store.delete_by_id(user_id))

    def test_is_reachable(self) -> None:
        self.assertTrue(self.store.is_reachable())

    def test_is_unreachable_without_users_table(self) -> None:
        bare = sessionmaker(bind=create_engine("sqlite://"))()
        try:
            self.assertFalse(UserStore(bare).is_reachable())
        finally:
            bare.close()

    def test_duplicate_email_rolls_back(self) -> None:
        self.store.create(_fields())
        with self.assertRaises(IntegrityError):
            self.store.create(_fields(user_name="other"))
        # session is usable again after the rollback
        self.assertEqual(len(self.store.find()), 1)


if __name__ == "__main__":
    unittest.main()
