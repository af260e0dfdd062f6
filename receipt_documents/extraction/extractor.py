"""AI-powered receipt extraction."""

import json
from pathlib import Path

from receipt_documents.database.models import Category
from receipt_documents.database.repositories.categories_repository import CategoriesRepository
from receipt_documents.database.repositories.expense_documents_repository import (
    ExpenseDocumentsRepository,
)
from receipt_documents.documents.exceptions import DocumentNotFoundError, StorageDisabledError
from receipt_documents.extraction.client_base import BaseExtractionClient
from receipt_documents.extraction.exceptions import (
    DocumentUrlUnavailableError,
    ExtractionDisabledError,
)
from receipt_documents.extraction.models import ReceiptExtractedInfo
from receipt_documents.extraction.parser import parse_comma_reply, parse_json_reply
from receipt_documents.extraction.prompt_loader import load_json_schema, load_prompt_template
from receipt_documents.logging.logger import Log
from receipt_documents.storage.base import BaseObjectStore

DEFAULT_SIGNED_URL_TTL_SECONDS = 5 * 60


def format_category(category: Category) -> str:
    """Render a category the way the prompt lists them."""
    return f'"{category.grouping}/{category.name}" (ID: {category.id})'


class ReceiptExtractor:
    """Reads amount, category, date and title from a stored receipt image."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        store: BaseObjectStore | None,
        documents_repo: ExpenseDocumentsRepository,
        categories_repo: CategoriesRepository,
        enabled: bool = True,
        structured_output: bool = False,
        signed_url_ttl_seconds: int = DEFAULT_SIGNED_URL_TTL_SECONDS,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._store = store
        self._documents_repo = documents_repo
        self._categories_repo = categories_repo
        self._enabled = enabled
        self._structured_output = structured_output
        self._signed_url_ttl_seconds = signed_url_ttl_seconds
        self._prompt_template = load_prompt_template(
            prompt_template_path, structured=structured_output
        )
        self._json_schema: dict[str, object] | None = None
        if structured_output:
            self._json_schema = json.loads(load_json_schema(json_schema_path))

    def extract(self, document_id: str) -> ReceiptExtractedInfo:
        """Extract expense fields from the receipt stored for ``document_id``.

        Raises:
            ExtractionDisabledError: if extraction is turned off.
            DocumentNotFoundError: if the document record is missing.
            StorageDisabledError: if no object store is configured.
            DocumentUrlUnavailableError: if no signed URL could be produced.
            ExtractionError: if the provider call or reply parsing fails.
        """
        if not self._enabled:
            raise ExtractionDisabledError("Receipt extraction is not enabled")

        categories = self._categories_repo.list_all()
        image_url = self._resolve_signed_url(document_id)
        if not image_url:
            raise DocumentUrlUnavailableError("No document URL available for extraction")

        prompt = self._build_prompt(categories)
        Log.debug(f"Extraction prompt:\n{prompt}")

        raw_response = self._client.create_vision_completion(
            model=self._model,
            prompt=prompt,
            image_url=image_url,
            json_schema=self._json_schema,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        if self._structured_output:
            result = parse_json_reply(raw_response)
        else:
            result = parse_comma_reply(raw_response)

        Log.info(f"Extraction complete for document {document_id}")
        return result

    def _resolve_signed_url(self, document_id: str) -> str:
        try:
            document = self._documents_repo.find_by_id(document_id)
        except DocumentNotFoundError as exc:
            raise DocumentNotFoundError("Document not found.") from exc
        if not document.url:
            raise DocumentNotFoundError("Document not found.")

        if self._store is None:
            raise StorageDisabledError("S3 client not configured")

        key = self._store.key_from_url(document.url)
        return self._store.sign_url(key, expires_in=self._signed_url_ttl_seconds)

    def _build_prompt(self, categories: list[Category]) -> str:
        return self._prompt_template.format(
            categories=", ".join(format_category(category) for category in categories),
        )
