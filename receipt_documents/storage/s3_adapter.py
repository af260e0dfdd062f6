from collections.abc import Iterator
from typing import Any

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from receipt_documents.storage.base import BaseObjectStore
from receipt_documents.storage.exceptions import ObjectStoreError
from receipt_documents.storage.models import StoredObject

_CHUNK_SIZE = 64 * 1024


class S3ObjectStore(BaseObjectStore):
    """Object store backed by S3 or an S3-compatible provider."""

    def __init__(
        self,
        *,
        bucket: str,
        region: str,
        access_key_id: str,
        secret_access_key: str,
        endpoint: str | None = None,
    ) -> None:
        self.bucket = bucket
        self.region = region
        self.endpoint = endpoint or None
        # Custom endpoints (MinIO, R2, ...) expect the bucket in the path.
        addressing_style = "path" if self.endpoint else "auto"
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            endpoint_url=self.endpoint,
            config=Config(s3={"addressing_style": addressing_style}),
        )

    def put_object(
        self,
        key: str,
        body: bytes,
        *,
        content_type: str,
        content_disposition: str | None = None,
    ) -> None:
        params: dict[str, Any] = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": body,
            "ContentType": content_type,
        }
        if content_disposition is not None:
            params["ContentDisposition"] = content_disposition
        try:
            self._client.put_object(**params)
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(f"Failed to write object '{key}': {exc}") from exc

    def get_object(self, key: str) -> StoredObject:
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(f"Failed to read object '{key}': {exc}") from exc
        return StoredObject(
            chunks=_iter_body(response["Body"]),
            content_type=response.get("ContentType"),
            content_length=response.get("ContentLength"),
        )

    def sign_url(self, key: str, *, expires_in: int) -> str:
        try:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (ClientError, BotoCoreError) as exc:
            raise ObjectStoreError(f"Failed to sign URL for '{key}': {exc}") from exc


def _iter_body(body: Any) -> Iterator[bytes]:
    try:
        yield from body.iter_chunks(chunk_size=_CHUNK_SIZE)
    finally:
        body.close()
