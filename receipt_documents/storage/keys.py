"""Mapping between document ids, object keys and stored object URLs.

``build_object_url`` and ``parse_object_key`` must stay inverse of each
other for both URL shapes, otherwise retrieval resolves the wrong object.
"""

from urllib.parse import urlsplit

UPLOAD_PREFIX = "uploads/"


def build_key(document_id: str) -> str:
    """Return the object key for a document: uploads/<document_id>."""
    return f"{UPLOAD_PREFIX}{document_id}"


def build_object_url(
    key: str,
    *,
    bucket: str,
    region: str,
    endpoint: str | None = None,
) -> str:
    """Build the URL stored for an object.

    With a custom endpoint the provider is addressed path-style:
    ``<endpoint>/<bucket>/<key>``. Otherwise the standard AWS
    virtual-hosted URL is returned.
    """
    if endpoint:
        return f"{endpoint.rstrip('/')}/{bucket}/{key}"
    return f"https://{bucket}.s3.{region}.amazonaws.com/{key}"


def parse_object_key(
    url: str,
    bucket: str,
    *,
    region: str | None = None,
    endpoint: str | None = None,
) -> str:
    """Recover the object key from a URL built by ``build_object_url``.

    When the host is the bucket's own AWS hostname the whole path is the key.
    Otherwise the URL is endpoint style: the endpoint's own path prefix and
    then a leading ``bucket`` segment are dropped. Input that is not an
    absolute URL is treated as a plain path. Never raises.
    """
    if not url:
        return ""
    host, path = _split_url(url)
    segments = _segments(path)
    if host and _is_bucket_host(host, bucket, region):
        return "/".join(segments)

    if endpoint:
        prefix = _segments(_split_url(endpoint)[1])
        if prefix and segments[: len(prefix)] == prefix:
            segments = segments[len(prefix):]
    if segments and segments[0] == bucket:
        segments = segments[1:]
    return "/".join(segments)


def _split_url(url: str) -> tuple[str, str]:
    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
    except ValueError:
        return "", url
    if parts.scheme and parts.netloc:
        return host, parts.path
    return "", url


def _segments(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def _is_bucket_host(host: str, bucket: str, region: str | None) -> bool:
    bucket = bucket.lower()
    if region:
        return host == f"{bucket}.s3.{region.lower()}.amazonaws.com"
    return host.startswith(f"{bucket}.s3.") and host.endswith(".amazonaws.com")
