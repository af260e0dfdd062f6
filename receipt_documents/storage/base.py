from abc import ABC, abstractmethod

from receipt_documents.storage.keys import build_object_url, parse_object_key
from receipt_documents.storage.models import StoredObject


class BaseObjectStore(ABC):
    """Contract for object storage adapters.

    Subclasses set ``bucket``, ``region`` and ``endpoint``; URL building and
    key parsing are shared here so both always use the same configuration.
    """

    bucket: str
    region: str
    endpoint: str | None = None

    @abstractmethod
    def put_object(
        self,
        key: str,
        body: bytes,
        *,
        content_type: str,
        content_disposition: str | None = None,
    ) -> None:
        """Write an object under ``key``.

        Raises:
            ObjectStoreError: if the store rejects the write.
        """

    @abstractmethod
    def get_object(self, key: str) -> StoredObject:
        """Open the object stored under ``key`` for reading.

        Raises:
            ObjectStoreError: if the object is missing or cannot be read.
        """

    @abstractmethod
    def sign_url(self, key: str, *, expires_in: int) -> str:
        """Return a time-limited GET URL for ``key``.

        Raises:
            ObjectStoreError: if signing fails.
        """

    def object_url(self, key: str) -> str:
        return build_object_url(
            key, bucket=self.bucket, region=self.region, endpoint=self.endpoint
        )

    def key_from_url(self, url: str) -> str:
        return parse_object_key(
            url, self.bucket, region=self.region, endpoint=self.endpoint
        )
