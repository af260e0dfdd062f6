import io

import pytest
from PIL import Image

from receipt_documents.database.models import Category, ExpenseDocument
from receipt_documents.documents.exceptions import DocumentNotFoundError
from receipt_documents.storage.base import BaseObjectStore
from receipt_documents.storage.exceptions import ObjectStoreError
from receipt_documents.storage.models import StoredObject


class InMemoryObjectStore(BaseObjectStore):
    """Object store keeping objects in a dict; records every call."""

    def __init__(
        self,
        *,
        bucket: str = "receipts",
        region: str = "eu-west-1",
        endpoint: str | None = None,
        report_content_type: bool = True,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.endpoint = endpoint
        self.report_content_type = report_content_type
        self.objects: dict[str, tuple[bytes, str, str | None]] = {}
        self.signed: list[tuple[str, int]] = []
        self.fail_writes = False

    def put_object(
        self,
        key: str,
        body: bytes,
        *,
        content_type: str,
        content_disposition: str | None = None,
    ) -> None:
        if self.fail_writes:
            raise ObjectStoreError("write refused")
        self.objects[key] = (body, content_type, content_disposition)

    def get_object(self, key: str) -> StoredObject:
        stored = self.objects.get(key)
        if stored is None:
            raise ObjectStoreError(f"NoSuchKey: {key}")
        body, content_type, _disposition = stored
        return StoredObject(
            chunks=iter([body[:3], body[3:]]),
            content_type=content_type if self.report_content_type else None,
            content_length=len(body),
        )

    def sign_url(self, key: str, *, expires_in: int) -> str:
        self.signed.append((key, expires_in))
        return f"https://signed.example.com/{key}?expires={expires_in}"


class InMemoryDocumentsRepository:
    """Stands in for ExpenseDocumentsRepository."""

    def __init__(self) -> None:
        self.rows: dict[str, ExpenseDocument] = {}

    def find_by_id(self, document_id: str) -> ExpenseDocument:
        document = self.rows.get(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return document

    def create(self, document: ExpenseDocument) -> ExpenseDocument:
        self.rows[document.id] = document
        return document


class StaticCategoriesRepository:
    """Stands in for CategoriesRepository."""

    def __init__(self, categories: list[Category] | None = None) -> None:
        self.categories = categories if categories is not None else [
            Category(id=0, grouping="Uncategorized", name="General"),
            Category(id=8, grouping="Food and Drink", name="Groceries"),
        ]
        self.calls = 0

    def list_all(self) -> list[Category]:
        self.calls += 1
        return list(self.categories)


@pytest.fixture()
def object_store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture()
def documents_repo() -> InMemoryDocumentsRepository:
    return InMemoryDocumentsRepository()


@pytest.fixture()
def categories_repo() -> StaticCategoriesRepository:
    return StaticCategoriesRepository()


@pytest.fixture()
def png_1x1_bytes() -> bytes:
    """A valid 1x1 PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (1, 1), color=(255, 255, 255)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def receipt_png_bytes() -> bytes:
    """A 40x60 PNG image."""
    buf = io.BytesIO()
    Image.new("RGB", (40, 60), color=(250, 250, 240)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def make_object_store() -> type[InMemoryObjectStore]:
    return InMemoryObjectStore
