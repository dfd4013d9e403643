"""MailService: sending, listing and reading mail.

Mail is keyed by recipient account. The only mutation after creation is
the read flag, which goes from unread to read and never back.

``read_mail`` and ``mail_info`` take a bare mail id and check nothing
but existence: anyone holding an id can open that mail.
"""

from __future__ import annotations

import logging

from sqlalchemy import insert, select, update

from mailctl.infrastructure.database.counters import MAIL, next_id
from mailctl.infrastructure.database.schema import mails
from mailctl.services.base import BaseService
from mailctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class MailService(BaseService):
    """Handles mail creation, queries and read-marking."""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _mail_not_found(op: str, mail_id: int) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="MAIL_NOT_FOUND",
                message="mail not found",
                detail={"mail_id": mail_id},
            ),
        )

    def _list(self, op: str, session_id: int, *, unread_only: bool) -> ServiceResult:
        with self._store.transaction() as txn:
            account_id = txn.account_id_for_session(session_id)
            if account_id is None:
                return self._session_not_found(op, session_id)

            stmt = select(mails.c.id).where(mails.c.recipient_id == account_id)
            if unread_only:
                stmt = stmt.where(mails.c.is_read == 0)
            mail_ids = [int(row.id) for row in txn.conn.execute(stmt.order_by(mails.c.id))]

        return ServiceResult(
            ok=True,
            op=op,
            data={"mail_ids": mail_ids, "count": len(mail_ids)},
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def list_mails(self, session_id: int) -> ServiceResult:
        """Ids of every mail addressed to the session's account, oldest first."""
        return self._list("list_mails", session_id, unread_only=False)

    def list_unread_mails(self, session_id: int) -> ServiceResult:
        """Ids of unread mail addressed to the session's account, oldest first."""
        return self._list("list_unread_mails", session_id, unread_only=True)

    def mail_info(self, mail_id: int) -> ServiceResult:
        """Display metadata for a mail. Does not mark it read."""
        op = "mail_info"

        with self._store.transaction() as txn:
            row = txn.conn.execute(
                select(mails.c.id, mails.c.sender_id, mails.c.subject).where(mails.c.id == mail_id)
            ).first()
            if row is None:
                return self._mail_not_found(op, mail_id)
            sender = txn.username_for_account(row.sender_id)

        return ServiceResult(
            ok=True,
            op=op,
            data={"id": int(row.id), "sender": sender, "subject": row.subject},
        )

    def read_mail(self, mail_id: int) -> ServiceResult:
        """Return the body and mark the mail read. Reading twice is harmless."""
        op = "read_mail"

        with self._store.transaction() as txn:
            row = txn.conn.execute(select(mails.c.body).where(mails.c.id == mail_id)).first()
            if row is None:
                return self._mail_not_found(op, mail_id)
            txn.conn.execute(update(mails).where(mails.c.id == mail_id).values(is_read=1))

        logger.debug("Mail %d marked read", mail_id)
        return ServiceResult(ok=True, op=op, data={"id": mail_id, "body": row.body})

    def write_mail(
        self,
        session_id: int,
        recipient: str,
        subject: str,
        body: str,
    ) -> ServiceResult:
        """Send a mail from the session's account to *recipient* (a username).

        An unknown recipient drops the mail: the result is still ``ok``,
        nothing is stored, and a warning names the recipient.
        """
        op = "write_mail"

        with self._store.transaction() as txn:
            sender_id = txn.account_id_for_session(session_id)
            if sender_id is None:
                return self._session_not_found(op, session_id)

            target = txn.account_by_username(recipient)
            if target is None:
                logger.info("Dropped mail to unknown recipient %s", recipient)
                return ServiceResult(
                    ok=True,
                    op=op,
                    data={"delivered": False, "recipient": recipient},
                    warnings=[f'No user with username "{recipient}"; mail was not delivered'],
                )

            mail_id = next_id(txn.conn, MAIL)
            txn.conn.execute(
                insert(mails).values(
                    id=mail_id,
                    sender_id=sender_id,
                    recipient_id=target.id,
                    subject=subject,
                    body=body,
                )
            )

        logger.info("Mail %d delivered to %s", mail_id, recipient)
        return ServiceResult(
            ok=True,
            op=op,
            data={"delivered": True, "id": mail_id, "recipient": recipient, "subject": subject},
        )
