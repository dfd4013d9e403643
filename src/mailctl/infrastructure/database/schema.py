"""SQLAlchemy Core table definitions for the mail store.

Three entity tables (accounts, sessions, mails) plus the id_counters
table that hands out ids for each of them.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, MetaData, Table, Text, func

metadata = MetaData()

accounts = Table(
    "accounts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("username", Text, nullable=False, unique=True),
    Column("password", Text, nullable=False),  # stored verbatim
    Column("created", Text, nullable=False, server_default=func.current_timestamp()),
)

sessions = Table(
    "sessions",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("account_id", Integer, ForeignKey("accounts.id"), nullable=False),
    Column("created", Text, nullable=False, server_default=func.current_timestamp()),
)

mails = Table(
    "mails",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("sender_id", Integer, ForeignKey("accounts.id"), nullable=False),
    Column("recipient_id", Integer, ForeignKey("accounts.id"), nullable=False),
    Column("subject", Text, nullable=False),
    Column("body", Text, nullable=False),
    Column("is_read", Integer, nullable=False, default=0, server_default="0"),
    Column("created", Text, nullable=False, server_default=func.current_timestamp()),
)

id_counters = Table(
    "id_counters",
    metadata,
    Column("collection", Text, primary_key=True),
    Column("next_value", Integer, nullable=False, default=1, server_default="1"),
)
