from collections.abc import Iterator
from dataclasses import dataclass


@dataclass
class StoredObject:
    """An object read back from the store, body not yet consumed."""

    chunks: Iterator[bytes]
    content_type: str | None = None
    content_length: int | None = None
