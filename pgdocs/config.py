"""
config.py
---------
Environment-driven settings. Loads variables from a .env file (if present)
and exposes them as typed constants. The document core never reads these
directly; they feed ``ConnectionSource.from_env()`` and the logger.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("PGDOCS_DB_HOST", "localhost")
DB_PORT: int = int(os.getenv("PGDOCS_DB_PORT", "5432"))
DB_NAME: str = os.getenv("PGDOCS_DB_NAME", "postgres")
DB_USER: str = os.getenv("PGDOCS_DB_USER", "postgres")
DB_PASS: str = os.getenv("PGDOCS_DB_PASS", "")

# A full connection string wins over the individual parts
CONN_STR: str = os.getenv("PGDOCS_CONN_STR", "")

DATABASE_URL: str = CONN_STR or (
    f"postgresql://{DB_USER}:{DB_PASS}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
)

# ── Connection pool ───────────────────────────────────────
POOL_MIN_CONN: int = int(os.getenv("PGDOCS_POOL_MIN", "1"))
POOL_MAX_CONN: int = int(os.getenv("PGDOCS_POOL_MAX", "5"))

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("PGDOCS_LOG_LEVEL", "WARNING")
