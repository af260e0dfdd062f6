from psycopg.rows import dict_row

from receipt_documents.database.connection import get_connection
from receipt_documents.database.models import Category


class CategoriesRepository:
    """Read-only access to the Category table."""

    def list_all(self) -> list[Category]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, grouping, name
                    FROM "Category"
                    ORDER BY id
                    """
                )
                rows = cur.fetchall()

        return [
            Category(id=row["id"], grouping=row["grouping"], name=row["name"])
            for row in rows
        ]
