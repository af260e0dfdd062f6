from dataclasses import dataclass


@dataclass(frozen=True)
class ExpenseDocument:
    """Represents a row from the ExpenseDocument table."""

    id: str
    url: str
    width: int
    height: int
    expense_id: str | None = None


@dataclass(frozen=True)
class Category:
    """Represents a row from the Category table."""

    id: int
    grouping: str
    name: str
