"""Tests for MailStore: seeding, transactions, lookup helpers."""

from __future__ import annotations

import pytest
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError

from mailctl.config.models import SeedAccount, StoreConfig
from mailctl.config.settings import MailSettings
from mailctl.infrastructure.database.schema import accounts, sessions
from mailctl.infrastructure.store import MailStore


class TestSeeding:
    def test_default_seed_accounts(self, store: MailStore) -> None:
        with store.transaction() as txn:
            assert txn.count(accounts) == 2
            user1 = txn.account_by_username("user1")
            user2 = txn.account_by_username("user2")
        assert user1 is not None and user1.password == "1234"
        assert user2 is not None and user2.password == "1234"

    def test_seed_disabled(self, empty_store: MailStore) -> None:
        with empty_store.transaction() as txn:
            assert txn.count(accounts) == 0

    def test_custom_seed_accounts(self) -> None:
        settings = MailSettings(
            store=StoreConfig(seed_accounts=[SeedAccount(username="alice", password="pw")])
        )
        s = MailStore(settings)
        try:
            with s.transaction() as txn:
                assert txn.count(accounts) == 1
                assert txn.account_by_username("alice") is not None
        finally:
            s.close()

    def test_duplicate_seed_is_skipped(self) -> None:
        seed = SeedAccount(username="dup", password="pw")
        s = MailStore(MailSettings(store=StoreConfig(seed_accounts=[seed, seed])))
        try:
            with s.transaction() as txn:
                assert txn.count(accounts) == 1
        finally:
            s.close()


class TestTransaction:
    def test_rollback_on_error(self, empty_store: MailStore) -> None:
        with pytest.raises(RuntimeError):
            with empty_store.transaction() as txn:
                txn.insert_account("ghost", "pw")
                raise RuntimeError("boom")
        with empty_store.transaction() as txn:
            assert txn.account_by_username("ghost") is None

    def test_username_unique_constraint(self, store: MailStore) -> None:
        with pytest.raises(IntegrityError):
            with store.transaction() as txn:
                txn.conn.execute(insert(accounts).values(id=99, username="user1", password="x"))

    def test_session_requires_existing_account(self, store: MailStore) -> None:
        with pytest.raises(IntegrityError):
            with store.transaction() as txn:
                txn.conn.execute(insert(sessions).values(id=1, account_id=12345))

    def test_stores_are_independent(self, store: MailStore, empty_store: MailStore) -> None:
        with store.transaction() as txn:
            txn.insert_account("only-here", "pw")
        with empty_store.transaction() as txn:
            assert txn.account_by_username("only-here") is None

    def test_lock_is_held_and_not_reentrant(self, store: MailStore) -> None:
        with store.transaction():
            assert not store._lock.acquire(blocking=False)
        assert store._lock.acquire(blocking=False)
        store._lock.release()


class TestLookupHelpers:
    def test_username_lookup_is_case_sensitive(self, store: MailStore) -> None:
        with store.transaction() as txn:
            assert txn.account_by_username("User1") is None

    def test_username_for_account(self, store: MailStore) -> None:
        with store.transaction() as txn:
            account_id = txn.insert_account("carol", "pw")
            assert txn.username_for_account(account_id) == "carol"
            assert txn.username_for_account(account_id + 1000) is None

    def test_account_id_for_unknown_session(self, store: MailStore) -> None:
        with store.transaction() as txn:
            assert txn.account_id_for_session(1) is None
