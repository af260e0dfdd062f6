from receipt_documents.config.settings import Settings
from receipt_documents.database.repositories.categories_repository import CategoriesRepository
from receipt_documents.database.repositories.expense_documents_repository import (
    ExpenseDocumentsRepository,
)
from receipt_documents.extraction.client_base import BaseExtractionClient
from receipt_documents.extraction.example_client_adapter import ExampleClientAdapter
from receipt_documents.extraction.extractor import ReceiptExtractor
from receipt_documents.extraction.openai_client_adapter import OpenAIClientAdapter
from receipt_documents.storage.base import BaseObjectStore


class ExtractorFactory:
    """Creates the receipt extractor for the configured provider."""

    PROVIDERS: tuple[str, ...] = ("example", "openai")

    @classmethod
    def create(
        cls,
        settings: Settings,
        *,
        store: BaseObjectStore | None,
        documents_repo: ExpenseDocumentsRepository,
        categories_repo: CategoriesRepository,
    ) -> ReceiptExtractor:
        """Create a configured extractor from application settings."""
        return ReceiptExtractor(
            client=cls._create_client(settings),
            model=settings.openai_image_model,
            store=store,
            documents_repo=documents_repo,
            categories_repo=categories_repo,
            enabled=settings.enable_receipt_extract,
            structured_output=settings.extraction_structured_output,
            signed_url_ttl_seconds=settings.signed_url_ttl_seconds,
        )

    @classmethod
    def _create_client(cls, settings: Settings) -> BaseExtractionClient:
        provider = settings.extraction_provider.lower()
        if provider == "example":
            return ExampleClientAdapter()
        if provider == "openai":
            return OpenAIClientAdapter(
                api_key=settings.openai_api_key,
                timeout_seconds=settings.openai_timeout_seconds,
                base_url=settings.openai_base_url or None,
            )
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
