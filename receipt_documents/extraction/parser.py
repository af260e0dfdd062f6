"""Turns model replies into ReceiptExtractedInfo."""

import json
import math
import re
from typing import Any

from receipt_documents.extraction.exceptions import ExtractionError
from receipt_documents.extraction.models import ReceiptExtractedInfo

_FIELD_COUNT = 4

# Plain decimal notation only: no digit separators, nan or inf.
_DECIMAL = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_comma_reply(raw: str | None) -> ReceiptExtractedInfo:
    """Parse an ``amount,categoryId,date,title`` reply.

    Only the first three commas separate fields, so a title keeps its own
    commas. Missing or blank fields become None; an unreadable amount
    becomes NaN.
    """
    parts = [part.strip() for part in (raw or "").split(",", _FIELD_COUNT - 1)]
    parts += [""] * (_FIELD_COUNT - len(parts))
    amount_text, category_id, date, title = parts
    return ReceiptExtractedInfo(
        amount=_to_amount(amount_text),
        category_id=category_id or None,
        date=date or None,
        title=title or None,
    )


def parse_json_reply(raw: str) -> ReceiptExtractedInfo:
    """Parse a schema-constrained JSON reply.

    Raises:
        ExtractionError: if the reply is not a JSON object.
    """
    data = _load_json_object(raw)
    return ReceiptExtractedInfo(
        amount=_to_amount(data.get("amount")),
        category_id=_to_text(data.get("categoryId")),
        date=_to_text(data.get("date")),
        title=_to_text(data.get("title")),
    )


def _to_amount(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return math.nan
    if not isinstance(value, (int, float)):
        value = str(value).strip()
        if not _DECIMAL.fullmatch(value):
            return math.nan
    try:
        amount = float(value)
    except OverflowError:
        return math.nan
    return amount if math.isfinite(amount) else math.nan


def _to_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _load_json_object(raw: str) -> dict[str, Any]:
    cleaned = raw.strip()
    if cleaned.startswith("```"):
        lines = cleaned.splitlines()
        if lines and lines[0].startswith("```"):
            lines = lines[1:]
        if lines and lines[-1].strip() == "```":
            lines = lines[:-1]
        cleaned = "\n".join(lines)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ExtractionError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ExtractionError("JSON response must be an object")
    return parsed
