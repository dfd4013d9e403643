"""Per-collection id generation for accounts, sessions and mails.

Each collection has its own row in ``id_counters``. Ids start at 1,
only ever grow, and are never handed out twice, even when the row that
held an id (a logged-out session) is gone.

The caller owns the transaction; pass a ``Connection`` obtained from
``engine.begin()`` so the counter increment participates in the same
atomic transaction as the insert that uses the id.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select, update

from mailctl.infrastructure.database.schema import id_counters

if TYPE_CHECKING:
    from sqlalchemy import Connection

ACCOUNT = "account"
SESSION = "session"
MAIL = "mail"

COLLECTIONS: tuple[str, ...] = (ACCOUNT, SESSION, MAIL)


def next_id(conn: Connection, collection: str) -> int:
    """Claim the next id for *collection*.

    Args:
        conn: Active SQLAlchemy connection (caller owns the transaction).
        collection: One of ``"account"``, ``"session"`` or ``"mail"``.

    Returns:
        The new id.

    Raises:
        ValueError: If *collection* is not a known collection.
    """
    if collection not in COLLECTIONS:
        msg = f"Unknown id collection: {collection!r}. Expected one of {sorted(COLLECTIONS)}"
        raise ValueError(msg)

    row = conn.execute(
        select(id_counters.c.next_value).where(id_counters.c.collection == collection)
    ).one()

    current_value: int = row.next_value

    conn.execute(
        update(id_counters)
        .where(id_counters.c.collection == collection)
        .values(next_value=current_value + 1)
    )

    return current_value
