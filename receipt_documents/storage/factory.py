from receipt_documents.config.settings import Settings
from receipt_documents.logging.logger import Log
from receipt_documents.storage.base import BaseObjectStore
from receipt_documents.storage.s3_adapter import S3ObjectStore


class ObjectStoreFactory:
    """Creates the object store when expense documents are enabled."""

    @classmethod
    def create(cls, settings: Settings) -> BaseObjectStore | None:
        """Return a configured store, or None when uploads are disabled.

        Uploads count as disabled when the feature flag is off or any of
        bucket, access key, secret or region is missing.
        """
        if not settings.enable_expense_documents:
            return None
        required = {
            "s3_upload_bucket": settings.s3_upload_bucket,
            "s3_upload_key": settings.s3_upload_key,
            "s3_upload_secret": settings.s3_upload_secret,
            "s3_upload_region": settings.s3_upload_region,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            Log.warning(f"Expense documents enabled but {missing} not set, uploads disabled")
            return None
        return S3ObjectStore(
            bucket=settings.s3_upload_bucket,
            region=settings.s3_upload_region,
            access_key_id=settings.s3_upload_key,
            secret_access_key=settings.s3_upload_secret,
            endpoint=settings.s3_upload_endpoint or None,
        )
