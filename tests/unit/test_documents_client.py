import json
from pathlib import Path

import httpx
import pytest

from receipt_documents.client.documents_client import DocumentsClient, make_absolute_url
from receipt_documents.client.exceptions import (
    DocumentFetchError,
    DocumentsClientError,
    DocumentUploadError,
)
from receipt_documents.client.images import read_image_dimensions

_RECORD = {
    "id": "doc-1",
    "url": "https://receipts.s3.eu-west-1.amazonaws.com/uploads/doc-1",
    "width": 40,
    "height": 60,
    "expenseId": None,
    "filename": "receipt.png",
}


def _client(handler) -> DocumentsClient:
    transport = httpx.MockTransport(handler)
    http = httpx.Client(base_url="http://testserver", transport=transport)
    return DocumentsClient("http://testserver", http_client=http)


class TestMakeAbsoluteUrl:
    def test_prefixes_relative_path(self) -> None:
        assert make_absolute_url("/api/documents/1", "https://app.example.com/") == (
            "https://app.example.com/api/documents/1"
        )

    def test_adds_missing_leading_slash(self) -> None:
        assert make_absolute_url("api/x", "https://app.example.com") == "https://app.example.com/api/x"

    def test_absolute_url_passes_through(self) -> None:
        url = "https://cdn.example.com/a.png"
        assert make_absolute_url(url, "https://app.example.com") == url

    def test_no_base_url_keeps_relative(self) -> None:
        assert make_absolute_url("/api/documents/1", "") == "/api/documents/1"


class TestDocumentUrl:
    def test_relative_without_base_url(self) -> None:
        client = DocumentsClient(http_client=httpx.Client())
        assert client.document_url("abc") == "/api/documents/abc"

    def test_absolute_with_base_url(self) -> None:
        client = DocumentsClient("https://app.example.com", http_client=httpx.Client())
        assert client.document_url("abc") == "https://app.example.com/api/documents/abc"

    def test_escapes_id(self) -> None:
        client = DocumentsClient(http_client=httpx.Client())
        assert client.document_url("a/b c") == "/api/documents/a%2Fb%20c"


class TestUploadDocument:
    def test_posts_multipart_with_dimensions(self, receipt_png_bytes: bytes) -> None:
        seen: dict[str, object] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = request.read()
            return httpx.Response(200, json=_RECORD)

        record = _client(handler).upload_document(receipt_png_bytes, filename="receipt.png")

        assert seen["method"] == "POST"
        assert seen["path"] == "/api/documents"
        body = seen["body"]
        assert isinstance(body, bytes)
        assert b'name="width"\r\n\r\n40' in body
        assert b'name="height"\r\n\r\n60' in body
        assert b'filename="receipt.png"' in body
        assert b"Content-Type: image/png" in body
        assert record.id == "doc-1"
        assert record.width == 40
        assert record.expense_id is None

    def test_explicit_dimensions_skip_image_decoding(self) -> None:
        seen: dict[str, bytes] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = request.read()
            return httpx.Response(200, json=_RECORD)

        _client(handler).upload_document(b"%PDF-1.7", filename="r.pdf", width=10, height=20)

        assert b'name="width"\r\n\r\n10' in seen["body"]
        assert b"Content-Type: application/pdf" in seen["body"]

    def test_reads_path_and_uses_its_name(
        self, tmp_path: Path, png_1x1_bytes: bytes
    ) -> None:
        path = tmp_path / "scan.png"
        path.write_bytes(png_1x1_bytes)
        seen: dict[str, bytes] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = request.read()
            return httpx.Response(200, json=_RECORD)

        _client(handler).upload_document(path)

        assert b'filename="scan.png"' in seen["body"]
        assert b'name="width"\r\n\r\n1' in seen["body"]

    def test_error_response_raises(self, png_1x1_bytes: bytes) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(413, json={"error": "file too large"})

        with pytest.raises(DocumentUploadError, match="upload_document failed: 413") as exc_info:
            _client(handler).upload_document(png_1x1_bytes)
        assert "file too large" in str(exc_info.value)

    def test_undecodable_bytes_without_dimensions_raise(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("request must not be sent")

        with pytest.raises(DocumentsClientError, match="Cannot read image dimensions"):
            _client(handler).upload_document(b"not an image")


class TestFetchDocument:
    def test_returns_bytes(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/documents/doc-1"
            return httpx.Response(200, content=b"stored-bytes")

        assert _client(handler).fetch_document("doc-1") == b"stored-bytes"

    def test_not_found_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, text="not found")

        with pytest.raises(DocumentFetchError, match="fetch_document failed: 404 not found"):
            _client(handler).fetch_document("missing")


class TestReadImageDimensions:
    def test_reads_png(self, receipt_png_bytes: bytes) -> None:
        assert read_image_dimensions(receipt_png_bytes) == (40, 60)

    def test_invalid_bytes_raise(self) -> None:
        with pytest.raises(DocumentsClientError):
            read_image_dimensions(json.dumps(_RECORD).encode())
