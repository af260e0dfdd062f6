"""Thin typed client for the documents API routes."""

import mimetypes
import re
from pathlib import Path
from typing import BinaryIO
from urllib.parse import quote

import httpx

from receipt_documents.client.exceptions import DocumentFetchError, DocumentUploadError
from receipt_documents.client.images import read_image_dimensions
from receipt_documents.client.models import ExpenseDocumentRecord

DOCUMENTS_PATH = "/api/documents"

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)


def make_absolute_url(value: str, base_url: str) -> str:
    """Prefix a relative path with ``base_url``; absolute URLs pass through."""
    if not value or _ABSOLUTE_URL.match(value) or not base_url:
        return value
    path = value if value.startswith("/") else f"/{value}"
    return f"{base_url.rstrip('/')}{path}"


class DocumentsClient:
    """Uploads and downloads receipt documents over HTTP."""

    def __init__(
        self,
        base_url: str = "",
        *,
        http_client: httpx.Client | None = None,
        timeout_seconds: int = 30,
    ) -> None:
        self._base_url = base_url
        self._http = http_client or httpx.Client(base_url=base_url, timeout=timeout_seconds)

    def document_url(self, document_id: str) -> str:
        """URL serving the document bytes, usable directly in an <img> tag."""
        relative = f"{DOCUMENTS_PATH}/{quote(document_id, safe='')}"
        return make_absolute_url(relative, self._base_url)

    def upload_document(
        self,
        data: bytes | BinaryIO | Path,
        *,
        filename: str | None = None,
        width: int | None = None,
        height: int | None = None,
        content_type: str | None = None,
    ) -> ExpenseDocumentRecord:
        """Upload a file as multipart/form-data and return the created record.

        Width and height are read from the image when not given.

        Raises:
            DocumentUploadError: on any non-success response.
            DocumentsClientError: if dimensions are missing and cannot be read.
        """
        if isinstance(data, Path):
            filename = filename or data.name
            body = data.read_bytes()
        elif isinstance(data, bytes):
            body = data
        else:
            body = data.read()
        filename = filename or "upload"

        if width is None or height is None:
            width, height = read_image_dimensions(body)
        if content_type is None:
            content_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"

        response = self._http.post(
            DOCUMENTS_PATH,
            files={"file": (filename, body, content_type)},
            data={"width": str(width), "height": str(height)},
        )
        if not response.is_success:
            raise DocumentUploadError(
                f"upload_document failed: {response.status_code} {response.text}"
            )
        return ExpenseDocumentRecord.from_payload(response.json())

    def fetch_document(self, document_id: str) -> bytes:
        """Download the stored bytes of a document.

        Raises:
            DocumentFetchError: on any non-success response.
        """
        response = self._http.get(f"{DOCUMENTS_PATH}/{quote(document_id, safe='')}")
        if not response.is_success:
            raise DocumentFetchError(
                f"fetch_document failed: {response.status_code} {response.text}"
            )
        return response.content

    def close(self) -> None:
        self._http.close()
