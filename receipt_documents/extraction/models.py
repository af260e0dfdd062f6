import math
from dataclasses import dataclass


@dataclass(frozen=True)
class ReceiptExtractedInfo:
    """Expense fields read from a receipt image.

    ``amount`` is NaN when the model reply held no readable number.
    """

    amount: float = math.nan
    category_id: str | None = None
    date: str | None = None
    title: str | None = None
