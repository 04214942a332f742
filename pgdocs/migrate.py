"""
migrate.py
----------
Command-line tool converting a 1.x table (dedicated ``id`` column) to the
2.x layout (identity embedded in the document):

    pgdocs-migrate my_table Id

1. Creates the unique index on ``data ->> '<id_field>'``.
2. Drops the now-redundant ``id`` column.

Both steps run in one transaction. The connection string comes from
PGDOCS_CONN_STR (or --conn-str); the confirmation prompt is skipped with
--yes or PGDOCS_MIGRATE_CONFIRM=1.
"""

from typing import Optional

import psycopg2
import typer

from pgdocs import query
from pgdocs.configuration import Configuration
from pgdocs.db import custom, definition
from pgdocs.db.connection import ConnectionSource
from pgdocs.errors import DocumentError
from pgdocs.models.document_key import DocumentKey, KeyStrategy
from pgdocs.utils.logger import get_logger

logger = get_logger(__name__)

app = typer.Typer(
    name="pgdocs-migrate",
    help="Convert a document table from a dedicated id column to an ID embedded in the document.",
    add_completion=False,
)


def _report(e: Exception) -> None:
    cause = e.__cause__ if isinstance(e.__cause__, psycopg2.Error) else e
    sql_state = getattr(cause, "pgcode", None)
    if sql_state:
        typer.echo(f"PostgreSQL Exception: {sql_state}", err=True)
    typer.echo(f"  {e}", err=True)


@app.command()
def migrate(
    table: str = typer.Argument(..., help="Table to convert (may be schema-qualified)."),
    id_field: str = typer.Argument(..., help="Document field holding the ID (case-sensitive)."),
    conn_str: Optional[str] = typer.Option(
        None, "--conn-str", envvar="PGDOCS_CONN_STR", help="PostgreSQL connection string."
    ),
    yes: bool = typer.Option(
        False, "--yes", "-y", envvar="PGDOCS_MIGRATE_CONFIRM", help="Do not ask for confirmation."
    ),
) -> None:
    """Convert TABLE to the embedded-key layout, using ID_FIELD as the document ID."""
    if not conn_str:
        typer.echo("Environment PGDOCS_CONN_STR not set; cannot continue", err=True)
        raise typer.Exit(code=1)

    key_sql = query.create_key(table, DocumentKey(KeyStrategy.EMBEDDED, id_field))
    drop_sql = f"ALTER TABLE {table} DROP COLUMN id"

    typer.echo(f'Converting {table} to v2, using ID field "{id_field}":')
    typer.echo(f"  {key_sql}")
    typer.echo(f"  {drop_sql}")
    if not yes:
        typer.confirm("Proceed?", abort=True)

    try:
        source = ConnectionSource(conn_str, 1, 1)
    except DocumentError as e:
        _report(e)
        raise typer.Exit(code=1)

    config = Configuration(source=source, id_field=id_field)
    try:
        with custom.connection(config=config) as conn:
            typer.echo(" - Creating unique ID index...")
            definition.ensure_key(table, conn=conn, config=config)
            typer.echo(" - Dropping old ID column...")
            custom.non_query(drop_sql, conn=conn, config=config)
    except (DocumentError, psycopg2.Error) as e:
        logger.error(f"Migration of {table} failed: {e}")
        _report(e)
        raise typer.Exit(code=1)
    finally:
        source.close()

    typer.echo(f"\n{table} converted successfully")


if __name__ == "__main__":
    app()
