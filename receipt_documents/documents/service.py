"""Upload and retrieval of expense documents."""

import uuid
from urllib.parse import quote

from receipt_documents.database.models import ExpenseDocument
from receipt_documents.database.repositories.expense_documents_repository import (
    ExpenseDocumentsRepository,
)
from receipt_documents.documents.exceptions import (
    DocumentNotFoundError,
    MissingInputError,
    ObjectFetchError,
    PayloadTooLargeError,
    StorageDisabledError,
    UploadFailedError,
)
from receipt_documents.documents.models import (
    DEFAULT_CONTENT_TYPE,
    DocumentContent,
    IncomingFile,
    UploadResult,
)
from receipt_documents.logging.logger import Log
from receipt_documents.storage.base import BaseObjectStore
from receipt_documents.storage.keys import build_key

DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024

# Characters encodeURIComponent leaves untouched, besides alphanumerics and "_.-~".
_FILENAME_SAFE_CHARS = "!*'()"


class DocumentService:
    """Stores uploaded receipt files and streams them back."""

    def __init__(
        self,
        *,
        store: BaseObjectStore | None,
        documents_repo: ExpenseDocumentsRepository,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
    ) -> None:
        self._store = store
        self._documents_repo = documents_repo
        self._max_file_size = max_file_size

    def upload(
        self,
        file: IncomingFile | None,
        *,
        width: str | int | None,
        height: str | int | None,
        expense_id: str | None = None,
    ) -> UploadResult:
        """Validate an upload, write it to the store and record it.

        Raises:
            StorageDisabledError: if no object store is configured.
            MissingInputError: if the file or a positive width/height is missing.
            PayloadTooLargeError: if the file exceeds the configured maximum.
            UploadFailedError: on any other failure while storing.
        """
        store = self._require_store("S3 upload not enabled")
        if file is None:
            raise MissingInputError("no file")

        parsed_width = _parse_dimension(width)
        parsed_height = _parse_dimension(height)
        if parsed_width is None or parsed_height is None:
            raise MissingInputError("missing width or height")

        try:
            body = file.stream.read()
        except OSError as exc:
            Log.exception(f"Failed to read uploaded file: {exc}")
            raise UploadFailedError("upload failed") from exc

        if len(body) > self._max_file_size:
            raise PayloadTooLargeError("file too large")

        document_id = str(uuid.uuid4())
        filename = file.filename or document_id
        key = build_key(document_id)

        try:
            store.put_object(
                key,
                body,
                content_type=file.content_type or DEFAULT_CONTENT_TYPE,
                content_disposition=_attachment_disposition(filename),
            )
            document = self._documents_repo.create(
                ExpenseDocument(
                    id=document_id,
                    url=store.object_url(key),
                    width=parsed_width,
                    height=parsed_height,
                    expense_id=expense_id or None,
                )
            )
        except Exception as exc:
            Log.exception(f"Upload of document {document_id} failed: {exc}")
            raise UploadFailedError("upload failed") from exc

        Log.info(f"Stored document {document_id} ({len(body)} bytes) at {key}")
        return UploadResult(document=document, filename=filename)

    def retrieve(self, document_id: str | None) -> DocumentContent:
        """Open the stored bytes of a document.

        Raises:
            StorageDisabledError: if no object store is configured.
            MissingInputError: if no document id is given.
            DocumentNotFoundError: if no record exists for the id.
            ObjectFetchError: on any storage failure.
        """
        store = self._require_store("S3 not enabled")
        if not document_id:
            raise MissingInputError("missing id")

        try:
            document = self._documents_repo.find_by_id(document_id)
            key = store.key_from_url(document.url)
            stored = store.get_object(key)
        except DocumentNotFoundError as exc:
            raise DocumentNotFoundError("not found") from exc
        except Exception as exc:
            Log.exception(f"Fetching document {document_id} failed: {exc}")
            raise ObjectFetchError("failed to fetch object") from exc

        return DocumentContent(
            chunks=stored.chunks,
            content_type=stored.content_type or DEFAULT_CONTENT_TYPE,
            content_length=stored.content_length or None,
        )

    def _require_store(self, message: str) -> BaseObjectStore:
        if self._store is None:
            raise StorageDisabledError(message)
        return self._store


def _parse_dimension(value: str | int | None) -> int | None:
    if value is None or value == "":
        return None
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return None
    return parsed if parsed > 0 else None


def _attachment_disposition(filename: str) -> str:
    return f'attachment; filename="{quote(filename, safe=_FILENAME_SAFE_CHARS)}"'
