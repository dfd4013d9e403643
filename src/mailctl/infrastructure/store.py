"""MailStore: the single owner of accounts, sessions and mails.

The store is the one dependency injected into every service. It owns a
private in-memory database and the lock that makes each transaction the
exclusive-access boundary for that database: one logical writer (or
reader) at a time. Separate stores share nothing, so any number can live
in one process.

Nothing outlives the store: :meth:`MailStore.close` drops the database.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, insert, select

from mailctl.config.settings import MailSettings
from mailctl.infrastructure.database.counters import ACCOUNT, next_id
from mailctl.infrastructure.database.engine import init_database
from mailctl.infrastructure.database.schema import accounts, sessions

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection, Row, Table
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# StoreTransaction: yielded to callers within transaction()
# ---------------------------------------------------------------------------


@dataclass
class StoreTransaction:
    """Active transaction context with the DB connection and lookup helpers."""

    conn: Connection

    def account_by_username(self, username: str) -> Row[Any] | None:
        """Find an account row by exact (case-sensitive) username."""
        return self.conn.execute(select(accounts).where(accounts.c.username == username)).first()

    def account_id_for_session(self, session_id: int) -> int | None:
        """Resolve a live session to its account id, or None."""
        row = self.conn.execute(
            select(sessions.c.account_id).where(sessions.c.id == session_id)
        ).first()
        return None if row is None else int(row.account_id)

    def username_for_account(self, account_id: int) -> str | None:
        row = self.conn.execute(
            select(accounts.c.username).where(accounts.c.id == account_id)
        ).first()
        return None if row is None else str(row.username)

    def insert_account(self, username: str, password: str) -> int:
        """Insert an account under a fresh id. Uniqueness is the caller's check."""
        account_id = next_id(self.conn, ACCOUNT)
        self.conn.execute(
            insert(accounts).values(id=account_id, username=username, password=password)
        )
        return account_id

    def count(self, table: Table) -> int:
        """Number of rows currently in *table*."""
        return int(self.conn.execute(select(func.count()).select_from(table)).scalar_one())


# ---------------------------------------------------------------------------
# MailStore: the repository
# ---------------------------------------------------------------------------


class MailStore:
    """Repository encapsulating the in-memory database.

    Constructed once at shell startup from :class:`MailSettings`.
    Services receive the store via their :class:`BaseService` constructor.

    Args:
        settings: Resolved settings; defaults are used when omitted.
        seed: Create the configured demonstration accounts.
    """

    def __init__(self, settings: MailSettings | None = None, *, seed: bool = True) -> None:
        self._settings = settings or MailSettings()
        self._engine: Engine = init_database()
        self._lock = threading.Lock()
        if seed:
            self._seed_accounts()

    @property
    def settings(self) -> MailSettings:
        """The resolved settings for this store."""
        return self._settings

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Exclusive transaction over the whole store.

        The store lock is held for the duration of the block, and the
        SQLAlchemy transaction commits on success and rolls back on any
        exception. Transactions must not be nested: every service method
        opens exactly one.

        Usage::

            with store.transaction() as txn:
                txn.conn.execute(insert(mails).values(...))
        """
        with self._lock, self._engine.begin() as conn:
            yield StoreTransaction(conn=conn)

    def close(self) -> None:
        """Dispose of the engine. The in-memory data is gone afterwards."""
        self._engine.dispose()

    def _seed_accounts(self) -> None:
        with self.transaction() as txn:
            for seed in self._settings.store.seed_accounts:
                if txn.account_by_username(seed.username) is not None:
                    logger.warning("Skipping duplicate seed account %s", seed.username)
                    continue
                account_id = txn.insert_account(seed.username, seed.password)
                logger.debug("Seeded account %s (id=%d)", seed.username, account_id)
