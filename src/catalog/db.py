"""
psycopg helpers for the products store.

Every helper runs in its own transaction unless a connection override is
set, in which case all statements share the override's transaction.
"""

from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.rows import dict_row

from catalog.config import config

TEST_DATABASE_SUFFIX = "_test"

_connection_override: psycopg.Connection | None = None


def set_connection_override(conn: psycopg.Connection) -> None:
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    global _connection_override
    _connection_override = None


def database_name(url: str) -> str:
    """Return the database name of a postgresql:// URL."""
    return url.rsplit("/", 1)[-1].split("?")[0]


def is_test_database(url: str | None) -> bool:
    """True if the URL names a disposable test database."""
    return bool(url) and database_name(url).endswith(TEST_DATABASE_SUFFIX)


@contextmanager
def get_connection():
    """
    Yield a connection that commits on success and rolls back on error.

    The override connection, when set, is yielded as is and left for
    its owner to commit or roll back.
    """
    if _connection_override is not None:
        yield _connection_override
        return

    if not config.database_url:
        raise RuntimeError("DATABASE_URL is not configured")

    conn = psycopg.connect(config.database_url)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def get_cursor():
    """Cursor with dict rows; statements share one transaction."""
    with get_connection() as conn:
        with conn.cursor(row_factory=dict_row) as cur:
            yield cur


def execute(query: str, params: tuple = None) -> int:
    """Run a statement and return the number of affected rows."""
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.rowcount


def fetch_one(query: str, params: tuple = None) -> dict[str, Any] | None:
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.fetchone()


def fetch_all(query: str, params: tuple = None) -> list[dict[str, Any]]:
    with get_cursor() as cur:
        cur.execute(query, params)
        return cur.fetchall()
