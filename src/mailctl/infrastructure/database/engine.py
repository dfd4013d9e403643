"""Database engine setup for the in-memory SQLite store.

Nothing is written to disk: every store gets its own private
``sqlite://`` database that lives as long as the engine does.
``StaticPool`` keeps the single connection alive between transactions,
otherwise the in-memory database would vanish when it is returned to
the pool.

SQLAlchemy Core (not ORM) is used because the store is a handful of
small tables with no need for identity maps or unit-of-work tracking.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from mailctl.infrastructure.database.counters import COLLECTIONS
from mailctl.infrastructure.database.schema import id_counters, metadata


def create_db_engine() -> Engine:
    """Create an in-memory SQLite engine with foreign keys enabled."""
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database() -> Engine:
    """Create a fresh in-memory database with all tables and seeded counters.

    Returns the engine ready for use.
    """
    engine = create_db_engine()
    metadata.create_all(engine)
    _seed_counters(engine)
    return engine


def _seed_counters(engine: Engine) -> None:
    """Insert an initial counter row for each collection if missing."""
    with engine.begin() as conn:
        for collection in COLLECTIONS:
            row = conn.execute(
                select(id_counters.c.collection).where(id_counters.c.collection == collection)
            ).first()
            if row is None:
                conn.execute(insert(id_counters).values(collection=collection, next_value=1))
