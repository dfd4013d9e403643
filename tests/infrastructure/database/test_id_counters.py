"""Tests for per-collection id generation."""

import pytest
from sqlalchemy.engine import Engine

from mailctl.infrastructure.database.counters import ACCOUNT, MAIL, SESSION, next_id
from mailctl.infrastructure.database.engine import init_database


@pytest.fixture
def db_engine() -> Engine:
    engine = init_database()
    try:
        yield engine
    finally:
        engine.dispose()


class TestNextId:
    def test_first_id_is_one(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            assert next_id(conn, MAIL) == 1

    def test_sequential_increment(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            ids = [next_id(conn, SESSION) for _ in range(5)]
        assert ids == [1, 2, 3, 4, 5]

    def test_independent_counters(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            a1 = next_id(conn, ACCOUNT)
            m1 = next_id(conn, MAIL)
            a2 = next_id(conn, ACCOUNT)
        assert (a1, m1, a2) == (1, 1, 2)

    def test_survives_across_transactions(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            next_id(conn, SESSION)
        with db_engine.begin() as conn:
            assert next_id(conn, SESSION) == 2

    def test_rolled_back_claim_is_not_kept(self, db_engine: Engine) -> None:
        with pytest.raises(RuntimeError):
            with db_engine.begin() as conn:
                next_id(conn, MAIL)
                raise RuntimeError("abort")
        with db_engine.begin() as conn:
            assert next_id(conn, MAIL) == 1

    def test_unknown_collection_raises(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            with pytest.raises(ValueError, match="Unknown id collection"):
                next_id(conn, "folder")
