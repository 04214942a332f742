"""Tests for the table migration command."""

import psycopg2
import pytest
from typer.testing import CliRunner

from pgdocs import migrate

runner = CliRunner()


@pytest.fixture(autouse=True)
def clear_env(monkeypatch) -> None:
    monkeypatch.delenv("PGDOCS_CONN_STR", raising=False)
    monkeypatch.delenv("PGDOCS_MIGRATE_CONFIRM", raising=False)


class TestMigrate:
    def test_requires_connection_string(self) -> None:
        result = runner.invoke(migrate.app, ["docs", "Id"])

        assert result.exit_code == 1
        assert "PGDOCS_CONN_STR not set" in result.output

    def test_converts_table_when_confirmed_by_env(self, fake_pools, fake_conn) -> None:
        result = runner.invoke(
            migrate.app,
            ["app.docs", "docId"],
            env={"PGDOCS_CONN_STR": "postgresql://test", "PGDOCS_MIGRATE_CONFIRM": "1"},
        )

        assert result.exit_code == 0, result.output
        assert [sql for sql, _ in fake_conn.executed] == [
            "CREATE UNIQUE INDEX IF NOT EXISTS idx_docs_key ON app.docs ((data ->> 'docId'))",
            "ALTER TABLE app.docs DROP COLUMN id",
        ]
        assert fake_conn.commits == 1
        assert fake_pools[0].closed
        assert "app.docs converted successfully" in result.output

    def test_aborts_when_not_confirmed(self, fake_pools, fake_conn) -> None:
        result = runner.invoke(
            migrate.app, ["docs", "Id", "--conn-str", "postgresql://test"], input="n\n"
        )

        assert result.exit_code == 1
        assert fake_conn.executed == []
        assert fake_pools == []

    def test_prompt_accepts_confirmation(self, fake_pools, fake_conn) -> None:
        result = runner.invoke(
            migrate.app, ["docs", "Id", "--conn-str", "postgresql://test"], input="y\n"
        )

        assert result.exit_code == 0, result.output
        assert len(fake_conn.executed) == 2

    def test_reports_postgres_failure(self, fake_pools, fake_conn) -> None:
        fake_conn.fail_with(psycopg2.ProgrammingError("column \"id\" does not exist"))

        result = runner.invoke(
            migrate.app, ["docs", "Id", "--conn-str", "postgresql://test", "--yes"]
        )

        assert result.exit_code == 1
        assert "does not exist" in result.output
        assert fake_conn.rollbacks == 1
        assert fake_pools[0].closed
