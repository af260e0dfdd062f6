from collections.abc import Iterator
from dataclasses import dataclass
from typing import BinaryIO

from receipt_documents.database.models import ExpenseDocument

DEFAULT_CONTENT_TYPE = "application/octet-stream"
IMMUTABLE_CACHE_CONTROL = "public, max-age=31536000, immutable"


@dataclass(frozen=True)
class IncomingFile:
    """A file received from the client, body not yet read."""

    stream: BinaryIO
    filename: str | None = None
    content_type: str | None = None


@dataclass(frozen=True)
class UploadResult:
    """The created document plus the original filename (not persisted)."""

    document: ExpenseDocument
    filename: str


@dataclass
class DocumentContent:
    """Stored bytes of a document, ready to stream back."""

    chunks: Iterator[bytes]
    content_type: str = DEFAULT_CONTENT_TYPE
    content_length: int | None = None
    cache_control: str = IMMUTABLE_CACHE_CONTROL
