import math

from pydantic import BaseModel, ConfigDict, Field

from receipt_documents.documents.models import UploadResult
from receipt_documents.extraction.models import ReceiptExtractedInfo


class DocumentOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    url: str
    width: int
    height: int
    expense_id: str | None = Field(default=None, alias="expenseId")
    filename: str | None = None

    @classmethod
    def from_upload(cls, result: UploadResult) -> "DocumentOut":
        document = result.document
        return cls(
            id=document.id,
            url=document.url,
            width=document.width,
            height=document.height,
            expense_id=document.expense_id,
            filename=result.filename,
        )


class ReceiptExtractionOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: float | None = None
    category_id: str | None = Field(default=None, alias="categoryId")
    date: str | None = None
    title: str | None = None

    @classmethod
    def from_info(cls, info: ReceiptExtractedInfo) -> "ReceiptExtractionOut":
        # NaN is not valid JSON
        amount = None if math.isnan(info.amount) else info.amount
        return cls(
            amount=amount,
            category_id=info.category_id,
            date=info.date,
            title=info.title,
        )
