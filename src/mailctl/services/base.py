"""BaseService: abstract foundation for all mailctl services.

Every service receives a :class:`MailStore` at construction time and
opens one ``self._store.transaction()`` per public operation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mailctl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from mailctl.infrastructure.store import MailStore


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class MailService(BaseService):
            def read_mail(self, mail_id: int) -> ServiceResult:
                with self._store.transaction() as txn:
                    ...
    """

    def __init__(self, store: MailStore) -> None:
        self._store = store

    @staticmethod
    def _session_not_found(op: str, session_id: int) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(
                code="SESSION_NOT_FOUND",
                message=f"No active session with id {session_id}",
                detail={"session_id": session_id},
            ),
        )
