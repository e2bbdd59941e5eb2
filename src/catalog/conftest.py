# src/catalog/conftest.py
"""
Pytest configuration and shared fixtures.

Tests are co-located with implementation files using the *_test.py suffix.
API tests run against the in-memory repository. PostgreSQL tests need
DATABASE_URL (for example via .env.test) naming a *_test database and
are skipped otherwise, since the session fixture drops and recreates it.
"""

import os

# Set environment BEFORE importing any app modules
os.environ["CATALOG_ENV"] = "test"

from decimal import Decimal
from pathlib import Path

import psycopg
import pytest
from psycopg.rows import dict_row

from catalog import db
from catalog.config import config
from catalog.product import InMemoryProductRepository, ProductPayload

# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def test_db():
    """
    Create test database and schema once per test session.

    This fixture:
    1. Drops the test database if it exists (clean slate)
    2. Creates a fresh test database
    3. Applies all migrations
    """
    test_db_url = config.database_url
    if not test_db_url:
        pytest.skip("DATABASE_URL is not set")
    # This fixture drops the database, so only touch names ending in _test
    if not db.is_test_database(test_db_url):
        pytest.skip(
            f"DATABASE_URL names {db.database_name(test_db_url)!r}, "
            f"not a *{db.TEST_DATABASE_SUFFIX} database"
        )

    base_url = test_db_url.rsplit("/", 1)[0] + "/postgres"
    db_name = db.database_name(test_db_url)

    try:
        admin = psycopg.connect(base_url, autocommit=True)
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL is not reachable: {e}")

    with admin as conn:
        with conn.cursor() as cur:
            # Terminate existing connections to test database
            cur.execute(
                """
                SELECT pg_terminate_backend(pg_stat_activity.pid)
                FROM pg_stat_activity
                WHERE pg_stat_activity.datname = %s
                AND pid <> pg_backend_pid()
            """,
                (db_name,),
            )

            cur.execute(f"DROP DATABASE IF EXISTS {db_name}")
            cur.execute(f"CREATE DATABASE {db_name}")

    migrations_dir = Path(__file__).parent.parent.parent / "migrations"
    schema_file = migrations_dir / "001_initial_schema.sql"

    if not schema_file.exists():
        raise FileNotFoundError(f"Migration file not found: {schema_file}")

    with psycopg.connect(test_db_url) as conn:
        with conn.cursor() as cur:
            cur.execute(schema_file.read_text())
        conn.commit()

    yield test_db_url


@pytest.fixture
def db_connection(test_db):
    """
    Provide a database connection with transaction rollback.

    Each test runs in a transaction that is rolled back at the end,
    so tests don't affect each other.
    """
    conn = psycopg.connect(config.database_url)

    with conn.cursor() as cur:
        cur.execute("TRUNCATE products")
    conn.commit()

    # Override the db module to use this connection
    db.set_connection_override(conn)

    yield conn

    conn.rollback()
    db.clear_connection_override()
    conn.close()


@pytest.fixture
def db_cursor(db_connection):
    """Provide a cursor for direct SQL operations in tests."""
    with db_connection.cursor(row_factory=dict_row) as cur:
        yield cur


# =============================================================================
# Repository Fixtures
# =============================================================================


@pytest.fixture
def product_repo(db_connection):
    """Provide a PostgresProductRepository instance."""
    from catalog.product import PostgresProductRepository

    return PostgresProductRepository()


@pytest.fixture
def memory_repo():
    """Provide an empty InMemoryProductRepository."""
    return InMemoryProductRepository()


# =============================================================================
# Seed Data Fixtures
# =============================================================================


@pytest.fixture
def sandalia_payload() -> ProductPayload:
    return ProductPayload(
        title="Sandalia",
        description="Sandália Preta Couro Salto Fino",
        price=Decimal("249.50"),
        quantity=100,
    )


@pytest.fixture
def sandalia_json() -> dict:
    return {
        "title": "Sandalia",
        "description": "Sandália Preta Couro Salto Fino",
        "price": 249.50,
        "quantity": 100,
    }


# =============================================================================
# Flask App Fixtures
# =============================================================================


@pytest.fixture
def app(memory_repo):
    """Create Flask application backed by the in-memory repository."""
    from catalog.app import create_app

    app = create_app(repository=memory_repo)
    app.config["TESTING"] = True

    return app


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()
