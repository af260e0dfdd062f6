from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ExpenseDocumentRecord:
    """Document record as returned by the upload endpoint."""

    id: str
    url: str
    width: int
    height: int
    expense_id: str | None = None
    filename: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ExpenseDocumentRecord":
        return cls(
            id=payload["id"],
            url=payload["url"],
            width=payload["width"],
            height=payload["height"],
            expense_id=payload.get("expenseId"),
            filename=payload.get("filename"),
        )
