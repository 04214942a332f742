"""Shared fixtures: an in-memory stand-in for psycopg2 pools and connections."""

from typing import Any

import pytest
from psycopg2 import pool

from pgdocs import configuration as configuration_module
from pgdocs.configuration import Configuration
from pgdocs.db.connection import ConnectionSource


class FakeCursor:
    """Records executed statements and replays queued result rows."""

    def __init__(self, conn: "FakeConnection") -> None:
        self._conn = conn
        self._rows: list[Any] = []
        self.rowcount = -1

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def execute(self, sql: str, params: dict | None = None) -> None:
        self._conn.executed.append((sql, params))
        if self._conn.errors:
            raise self._conn.errors.pop(0)
        self._rows = list(self._conn.results.pop(0)) if self._conn.results else []
        self.rowcount = self._conn.rowcount

    def fetchall(self) -> list[Any]:
        return self._rows

    def fetchone(self) -> Any:
        return self._rows[0] if self._rows else None


class FakeConnection:
    def __init__(self) -> None:
        self.executed: list[tuple[str, dict | None]] = []
        self.results: list[list[Any]] = []
        self.errors: list[Exception] = []
        self.rowcount = 0
        self.commits = 0
        self.rollbacks = 0
        self.cursor_factories: list[Any] = []

    def queue(self, *rows: Any) -> None:
        """Queue the rows returned by the next executed statement."""
        self.results.append(list(rows))

    def fail_with(self, error: Exception) -> None:
        """Make the next executed statement raise ``error``."""
        self.errors.append(error)

    def cursor(self, cursor_factory=None) -> FakeCursor:
        self.cursor_factories.append(cursor_factory)
        return FakeCursor(self)

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1

    @property
    def last_sql(self) -> str:
        return self.executed[-1][0]

    @property
    def last_params(self) -> dict | None:
        return self.executed[-1][1]


class FakePool:
    """Mimics ThreadedConnectionPool, always handing out the same connection."""

    def __init__(self, conn: FakeConnection) -> None:
        self._conn = conn
        self.closed = False
        self.checked_out = 0

    def getconn(self) -> FakeConnection:
        if self.closed:
            raise pool.PoolError("connection pool is closed")
        self.checked_out += 1
        return self._conn

    def putconn(self, conn: FakeConnection) -> None:
        self.checked_out -= 1

    def closeall(self) -> None:
        self.closed = True


@pytest.fixture
def fake_conn() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def fake_pools(monkeypatch, fake_conn) -> list[FakePool]:
    """Replace psycopg2's pool class; every pool created is recorded here."""
    created: list[FakePool] = []

    def factory(min_conn, max_conn, dsn):
        created.append(FakePool(fake_conn))
        return created[-1]

    monkeypatch.setattr(pool, "ThreadedConnectionPool", factory)
    return created


@pytest.fixture
def source(fake_pools) -> ConnectionSource:
    return ConnectionSource("postgresql://test@localhost/test")


@pytest.fixture
def config(source) -> Configuration:
    """A configuration with the default (embedded key) settings and a fake source."""
    return Configuration(source=source)


@pytest.fixture(autouse=True)
def isolated_default_configuration(monkeypatch) -> Configuration:
    """Give every test a fresh process-wide configuration."""
    fresh = Configuration()
    monkeypatch.setattr(configuration_module, "_default", fresh)
    return fresh
