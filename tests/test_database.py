"""Tests for transaction and readiness helpers."""

from unittest.mock import MagicMock

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from conftest import make_user
from utilities import tools
from utilities.database import execute_in_transaction
from utilities.models import User


class TestExecuteInTransaction:
    """Tests for execute_in_transaction."""

    def test_commits_and_returns_result(self, session):
        def action():
            session.add(make_user())
            return "done"

        assert execute_in_transaction(session, action) == "done"

        session.rollback()
        assert session.query(User).count() == 1

    def test_rolls_back_and_reraises(self, session):
        def action():
            session.add(make_user())
            session.flush()
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            execute_in_transaction(session, action)

        assert session.query(User).count() == 0


class TestTools:
    """Tests for database setup and readiness polling."""

    def test_setup_creates_all_tables(self, engine):
        assert set(inspect(engine).get_table_names()) == {
            "users",
            "products",
            "orders",
            "order_items",
            "reviews",
        }

    def test_drop_database(self, engine):
        tools.drop_database(engine)

        assert inspect(engine).get_table_names() == []

    def test_wait_for_database_available(self, engine):
        assert tools.wait_for_database(engine, max_retries=1, delay=0) is True

    def test_wait_for_database_gives_up(self, monkeypatch):
        sleeps = []
        monkeypatch.setattr(tools.time, "sleep", sleeps.append)
        engine = MagicMock()
        engine.connect.side_effect = OperationalError("SELECT 1", {}, Exception("down"))

        assert tools.wait_for_database(engine, max_retries=3, delay=2) is False
        assert engine.connect.call_count == 3
        assert sleeps == [2, 2, 2]
