from typing import Any

from psycopg.rows import dict_row

from receipt_documents.database.connection import get_connection
from receipt_documents.database.models import ExpenseDocument
from receipt_documents.documents.exceptions import DocumentNotFoundError


class ExpenseDocumentsRepository:
    """Database operations for the ExpenseDocument table."""

    def find_by_id(self, document_id: str) -> ExpenseDocument:
        """Find an expense document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, url, width, height, "expenseId"
                    FROM "ExpenseDocument"
                    WHERE id = %s
                    """,
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        return _to_document(row)

    def create(self, document: ExpenseDocument) -> ExpenseDocument:
        """Insert a new expense document and return the stored row."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    INSERT INTO "ExpenseDocument" (id, url, width, height, "expenseId")
                    VALUES (%s, %s, %s, %s, %s)
                    RETURNING id, url, width, height, "expenseId"
                    """,
                    (
                        document.id,
                        document.url,
                        document.width,
                        document.height,
                        document.expense_id,
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError(f"Insert of document {document.id} returned no row")
        return _to_document(row)


def _to_document(row: dict[str, Any]) -> ExpenseDocument:
    return ExpenseDocument(
        id=str(row["id"]),
        url=row["url"],
        width=row["width"],
        height=row["height"],
        expense_id=row["expenseId"],
    )
