# tests/test_database.py
"""Unit tests for the SQLAlchemy storage collaborator."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import DBAPIError
from sqlalchemy.pool import StaticPool
from fleetseed.config import Settings
from fleetseed.database import MAIN, USERS, SqlStorage, _is_missing_database, table_registry
from fleetseed.errors import ExpectedAbsenceError, FatalStageError


class FakePgError(Exception):
    def __init__(self, pgcode):
        super().__init__(f"pg error {pgcode}")
        self.pgcode = pgcode


def dbapi_error(orig):
    return DBAPIError("DROP DATABASE x", None, orig)


def make_storage():
    server = MagicMock()
    storage = SqlStorage(Settings(USERS_DB_NAME="u_db", MAIN_DB_NAME="m_db"), server_engine=server)
    return storage, server


def use_sqlite(storage, key):
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    storage._engines[key] = engine
    return engine


class TestMissingDatabaseDetection:
    def test_postgres_invalid_catalog(self):
        assert _is_missing_database(dbapi_error(FakePgError("3D000")))

    def test_mysql_unknown_database(self):
        assert _is_missing_database(dbapi_error(Exception(1008, "Can't drop database; database doesn't exist")))

    def test_other_errors_are_not_absence(self):
        assert not _is_missing_database(dbapi_error(FakePgError("55006")))
        assert not _is_missing_database(dbapi_error(Exception("permission denied")))


class TestRegistry:
    def test_tables_split_across_databases(self):
        registry = table_registry()
        assert registry["users"][0] == USERS
        assert registry["operators"][0] == USERS
        assert registry["customers"][0] == USERS
        for name in ("fleets", "locks", "bikes", "trips", "thefts", "crashes", "hubs", "parking_spots"):
            assert registry[name][0] == MAIN


class TestSchemaOperations:
    def test_database_names_come_from_settings(self):
        storage, _ = make_storage()
        assert storage.database_name(USERS) == "u_db"
        assert storage.database_name(MAIN) == "m_db"

    def test_dropping_missing_database_is_expected_absence(self):
        storage, server = make_storage()
        conn = server.connect.return_value.__enter__.return_value
        conn.execute.side_effect = dbapi_error(FakePgError("3D000"))

        with pytest.raises(ExpectedAbsenceError) as exc_info:
            storage.drop_database(USERS)
        assert exc_info.value.database == "u_db"

    def test_other_drop_failures_are_fatal(self):
        storage, server = make_storage()
        conn = server.connect.return_value.__enter__.return_value
        conn.execute.side_effect = dbapi_error(FakePgError("55006"))

        with pytest.raises(FatalStageError):
            storage.drop_database(MAIN)

    def test_drop_disposes_open_engine_first(self):
        storage, _ = make_storage()
        engine = MagicMock()
        storage._engines[MAIN] = engine

        storage.drop_database(MAIN)

        engine.dispose.assert_called_once()
        assert MAIN not in storage._engines

    def test_create_failure_is_fatal(self):
        storage, server = make_storage()
        conn = server.connect.return_value.__enter__.return_value
        conn.execute.side_effect = dbapi_error(FakePgError("42P04"))

        with pytest.raises(FatalStageError):
            storage.create_database(USERS)

    def test_unknown_table_is_fatal(self):
        storage, _ = make_storage()
        with pytest.raises(FatalStageError):
            storage.create_table("widgets")


class TestRows:
    def test_insert_then_select_with_filter(self):
        storage, _ = make_storage()
        use_sqlite(storage, MAIN)
        storage.create_table("fleets")

        storage.insert_batch("fleets", [
            {"fleet_name": "UH Bikes", "operator_id": 1, "customer_id": 10},
            {"fleet_name": "Spree Cycles", "operator_id": 2, "customer_id": 11},
        ])

        rows = storage.select("fleets")
        assert [r["fleet_id"] for r in rows] == [1, 2]
        assert [r["fleet_name"] for r in storage.select("fleets", {"operator_id": 2})] == ["Spree Cycles"]

    def test_failed_insert_is_fatal(self):
        storage, _ = make_storage()
        use_sqlite(storage, MAIN)
        storage.create_table("fleets")

        with pytest.raises(FatalStageError) as exc_info:
            storage.insert_batch("fleets", [{"operator_id": 1, "customer_id": 10}])   # fleet_name is NOT NULL
        assert exc_info.value.context == "fleets"

    def test_empty_batch_is_a_no_op(self):
        storage, _ = make_storage()
        storage.insert_batch("fleets", [])
        assert MAIN not in storage._engines

    def test_close_disposes_everything(self):
        storage, server = make_storage()
        engine = use_sqlite(storage, USERS)
        storage.close()
        server.dispose.assert_called_once()
        assert storage._engines == {}
        engine.dispose()
