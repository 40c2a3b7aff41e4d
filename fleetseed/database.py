# fleetseed/database.py
"""
Database layout and the SQLAlchemy storage collaborator.

The platform keeps two PostgreSQL databases: "users" (accounts) and "main"
(everything else). Each has its own declarative base so tables can be created
against the right engine. SqlStorage is the only object the pipeline talks to.
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy import create_engine, select, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.declarative import declarative_base

from fleetseed.config import Settings
from fleetseed.errors import ExpectedAbsenceError, FatalStageError
from fleetseed.utils.logger import get_logger

logger = get_logger(__name__)

USERS = "users"
MAIN = "main"

UsersBase = declarative_base()
MainBase = declarative_base()

BASES = {USERS: UsersBase, MAIN: MainBase}

# SQLSTATE / errno reported when the target database is missing
_PG_INVALID_CATALOG = "3D000"
_MYSQL_BAD_DB = 1008


def _import_models():
    """Import all models here so both metadatas know every table."""
    import fleetseed.models  # noqa


def table_registry() -> Dict[str, tuple]:
    """Map table name -> (database key, Table)."""
    _import_models()
    registry = {}
    for key, base in BASES.items():
        for name, table in base.metadata.tables.items():
            registry[name] = (key, table)
    return registry


def _is_missing_database(exc: DBAPIError) -> bool:
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code == _PG_INVALID_CATALOG:
        return True
    args = getattr(orig, "args", ())
    return bool(args) and args[0] == _MYSQL_BAD_DB


class SqlStorage:
    """
    Storage collaborator backed by SQLAlchemy engines.

    CREATE/DROP DATABASE run on an AUTOCOMMIT connection to the server URL.
    Per-database engines are created lazily and disposed before their
    database is dropped, since PostgreSQL refuses to drop a database with
    open connections.
    """

    def __init__(self, settings: Settings, server_engine: Optional[Engine] = None):
        self._settings = settings
        self._server_url = make_url(settings.DATABASE_SERVER_URL)
        self._server_engine = server_engine or create_engine(
            self._server_url,
            isolation_level="AUTOCOMMIT",
            pool_pre_ping=True,
        )
        self._engines: Dict[str, Engine] = {}
        self._registry = table_registry()

    # ── Database naming ──────────────────────────────────────────────────
    def database_name(self, key: str) -> str:
        return {USERS: self._settings.USERS_DB_NAME, MAIN: self._settings.MAIN_DB_NAME}[key]

    def engine_for(self, key: str) -> Engine:
        if key not in self._engines:
            url = self._server_url.set(database=self.database_name(key))
            self._engines[key] = create_engine(url, pool_pre_ping=True, echo=False)
        return self._engines[key]

    def _quote(self, name: str) -> str:
        return self._server_engine.dialect.identifier_preparer.quote(name)

    # ── Schema ───────────────────────────────────────────────────────────
    def create_database(self, key: str):
        name = self.database_name(key)
        statement = f"CREATE DATABASE {self._quote(name)}"
        try:
            with self._server_engine.connect() as conn:
                conn.execute(text(statement))
        except SQLAlchemyError as e:
            raise FatalStageError(f"Could not create database {name}: {e}", statement) from e
        logger.info(f"Created database {name}")

    def drop_database(self, key: str):
        """Drop one database. Raises ExpectedAbsenceError if it is not there."""
        name = self.database_name(key)
        engine = self._engines.pop(key, None)
        if engine is not None:
            engine.dispose()

        statement = f"DROP DATABASE {self._quote(name)}"
        try:
            with self._server_engine.connect() as conn:
                conn.execute(text(statement))
        except DBAPIError as e:
            if _is_missing_database(e):
                raise ExpectedAbsenceError(name) from e
            raise FatalStageError(f"Could not drop database {name}: {e}", statement) from e
        except SQLAlchemyError as e:
            raise FatalStageError(f"Could not drop database {name}: {e}", statement) from e
        logger.info(f"Dropped database {name}")

    def tables(self) -> List[str]:
        return list(self._registry)

    def create_table(self, table_name: str):
        key, table = self._lookup(table_name)
        try:
            table.create(self.engine_for(key))
        except SQLAlchemyError as e:
            raise FatalStageError(f"Could not create table {table_name}: {e}", table_name) from e
        logger.debug(f"Created table {self.database_name(key)}.{table_name}")

    # ── Rows ─────────────────────────────────────────────────────────────
    def insert_batch(self, table_name: str, records: Iterable[dict]):
        records = list(records)
        if not records:
            return
        key, table = self._lookup(table_name)
        try:
            with self.engine_for(key).begin() as conn:
                conn.execute(table.insert(), records)
        except SQLAlchemyError as e:
            raise FatalStageError(
                f"Failed to insert {len(records)} rows into {table_name}: {e}", table_name
            ) from e

    def select(self, table_name: str, filters: Optional[dict] = None) -> List[dict]:
        key, table = self._lookup(table_name)
        stmt = select(table)
        for column, value in (filters or {}).items():
            stmt = stmt.where(table.c[column] == value)
        try:
            with self.engine_for(key).connect() as conn:
                return [dict(row._mapping) for row in conn.execute(stmt)]
        except SQLAlchemyError as e:
            raise FatalStageError(f"Failed to read {table_name}: {e}", table_name) from e

    def close(self):
        for engine in self._engines.values():
            engine.dispose()
        self._engines.clear()
        self._server_engine.dispose()
        logger.info("Disposed database engines")

    def _lookup(self, table_name: str) -> tuple:
        try:
            return self._registry[table_name]
        except KeyError:
            raise FatalStageError(f"Unknown table {table_name}", table_name) from None
