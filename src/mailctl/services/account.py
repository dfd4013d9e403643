"""AccountService: registration, login and session teardown.

Session lifecycle: ``login`` creates a session bound to one account,
``logout`` destroys it. Nothing else creates, refreshes or expires a
session, and one account may hold any number of sessions at once.
"""

from __future__ import annotations

import logging

from sqlalchemy import delete, insert

from mailctl.infrastructure.database.counters import SESSION, next_id
from mailctl.infrastructure.database.schema import sessions
from mailctl.services.base import BaseService
from mailctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class AccountService(BaseService):
    """Handles accounts and the sessions that authenticate them."""

    def register(self, username: str, password: str) -> ServiceResult:
        """Create an account. Usernames are unique and case-sensitive."""
        op = "register"

        with self._store.transaction() as txn:
            if txn.account_by_username(username) is not None:
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(
                        code="USER_ALREADY_EXISTS",
                        message=f'User with username "{username}" already exists',
                        detail={"username": username},
                    ),
                )
            account_id = txn.insert_account(username, password)

        logger.info("Registered account %s (id=%d)", username, account_id)
        return ServiceResult(ok=True, op=op, data={"id": account_id, "username": username})

    def login(self, username: str, password: str) -> ServiceResult:
        """Check credentials and open a new session on success."""
        op = "login"

        with self._store.transaction() as txn:
            account = txn.account_by_username(username)
            if account is None:
                logger.debug("Login failed: no account %s", username)
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(
                        code="USER_DOESNT_EXIST",
                        message=f'No user with username "{username}" exists',
                        detail={"username": username},
                    ),
                )
            if account.password != password:
                logger.debug("Login failed: wrong password for %s", username)
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(
                        code="WRONG_PASSWORD",
                        message="Wrong username/password",
                        detail={"username": username},
                    ),
                )

            session_id = next_id(txn.conn, SESSION)
            txn.conn.execute(insert(sessions).values(id=session_id, account_id=account.id))

        logger.info("Session %d opened for %s", session_id, username)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "session_id": session_id,
                "account_id": int(account.id),
                "username": username,
            },
        )

    def logout(self, session_id: int) -> ServiceResult:
        """Destroy a session. Unknown ids are reported, not ignored."""
        op = "logout"

        with self._store.transaction() as txn:
            removed = txn.conn.execute(delete(sessions).where(sessions.c.id == session_id))
            if removed.rowcount == 0:
                return self._session_not_found(op, session_id)

        logger.info("Session %d closed", session_id)
        return ServiceResult(ok=True, op=op, data={"session_id": session_id})

    def whoami(self, session_id: int) -> ServiceResult:
        """Resolve a live session to its account."""
        op = "whoami"

        with self._store.transaction() as txn:
            account_id = txn.account_id_for_session(session_id)
            if account_id is None:
                return self._session_not_found(op, session_id)
            username = txn.username_for_account(account_id)

        return ServiceResult(
            ok=True,
            op=op,
            data={"session_id": session_id, "account_id": account_id, "username": username},
        )
