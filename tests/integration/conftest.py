import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from receipt_documents.config.settings import Settings
from receipt_documents.database.connection import close_pool, get_connection, init_pool
from receipt_documents.database.models import Category, ExpenseDocument

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS "Category" (
        id SERIAL PRIMARY KEY,
        grouping TEXT NOT NULL,
        name TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS "ExpenseDocument" (
        id TEXT PRIMARY KEY,
        url TEXT NOT NULL,
        width INTEGER NOT NULL,
        height INTEGER NOT NULL,
        "expenseId" TEXT
    )
    """,
)


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "receipts_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            with conn.cursor() as cur:
                for statement in _SCHEMA:
                    cur.execute(statement)
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* env to point at a disposable database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(
    integration_pool: None,
) -> Generator[list[tuple[str, Any]], None, None]:
    cleanup: list[tuple[str, Any]] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for table, row_id in cleanup:
                if table == "ExpenseDocument":
                    cur.execute('DELETE FROM "ExpenseDocument" WHERE id = %s', (row_id,))
                elif table == "Category":
                    cur.execute('DELETE FROM "Category" WHERE id = %s', (row_id,))
        conn.commit()


@pytest.fixture
def seed_document(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, Any]],
) -> ExpenseDocument:
    document = ExpenseDocument(
        id=str(uuid.uuid4()),
        url="https://receipts.s3.eu-west-1.amazonaws.com/uploads/seeded",
        width=640,
        height=480,
    )
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO "ExpenseDocument" (id, url, width, height, "expenseId")
            VALUES (%s, %s, %s, %s, %s)
            """,
            (document.id, document.url, document.width, document.height, None),
        )
    db_conn.commit()
    integration_cleanup.append(("ExpenseDocument", document.id))
    return document


@pytest.fixture
def seed_category(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, Any]],
) -> Category:
    grouping = f"Test {uuid.uuid4().hex[:8]}"
    with db_conn.cursor() as cur:
        cur.execute(
            'INSERT INTO "Category" (grouping, name) VALUES (%s, %s) RETURNING id',
            (grouping, "Receipts"),
        )
        row = cur.fetchone()
        assert row is not None
        category_id = row[0]
    db_conn.commit()
    integration_cleanup.append(("Category", category_id))
    return Category(id=category_id, grouping=grouping, name="Receipts")
