import io

from PIL import Image, UnidentifiedImageError

from receipt_documents.client.exceptions import DocumentsClientError


def read_image_dimensions(data: bytes) -> tuple[int, int]:
    """Return (width, height) of an encoded image.

    Raises:
        DocumentsClientError: if the bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            return image.width, image.height
    except (UnidentifiedImageError, OSError) as exc:
        raise DocumentsClientError(f"Cannot read image dimensions: {exc}") from exc
