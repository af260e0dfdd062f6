from fastapi import APIRouter, Depends, File, Form, UploadFile
from fastapi.responses import JSONResponse, PlainTextResponse, Response, StreamingResponse

from receipt_documents.api.dependencies import get_document_service, get_receipt_extractor
from receipt_documents.api.schemas import DocumentOut, ReceiptExtractionOut
from receipt_documents.documents.exceptions import (
    DocumentNotFoundError,
    DocumentsError,
    MissingInputError,
    PayloadTooLargeError,
    StorageDisabledError,
)
from receipt_documents.documents.models import IncomingFile
from receipt_documents.documents.service import DocumentService
from receipt_documents.extraction.exceptions import ExtractionDisabledError
from receipt_documents.extraction.extractor import ReceiptExtractor
from receipt_documents.logging.logger import Log

router = APIRouter(prefix="/api/documents", tags=["documents"])

_STATUS_CODES: dict[type[Exception], int] = {
    StorageDisabledError: 501,
    ExtractionDisabledError: 501,
    MissingInputError: 400,
    DocumentNotFoundError: 404,
    PayloadTooLargeError: 413,
}


def _status_for(exc: Exception) -> int:
    return _STATUS_CODES.get(type(exc), 500)


@router.post("", response_model=DocumentOut)
def create_document(
    file: UploadFile | None = File(None),
    width: str | None = Form(None),
    height: str | None = Form(None),
    expense_id: str | None = Form(None, alias="expenseId"),
    service: DocumentService = Depends(get_document_service),
) -> Response | DocumentOut:
    """Upload a receipt file and create its document record."""
    incoming = None
    if file is not None:
        incoming = IncomingFile(
            stream=file.file,
            filename=file.filename,
            content_type=file.content_type,
        )
    try:
        result = service.upload(
            incoming, width=width, height=height, expense_id=expense_id
        )
    except DocumentsError as exc:
        return JSONResponse({"error": str(exc)}, status_code=_status_for(exc))
    return DocumentOut.from_upload(result)


@router.get("/{document_id}")
def get_document(
    document_id: str,
    service: DocumentService = Depends(get_document_service),
) -> Response:
    """Stream the stored bytes of a document."""
    try:
        content = service.retrieve(document_id)
    except DocumentsError as exc:
        return PlainTextResponse(str(exc), status_code=_status_for(exc))

    headers = {"Cache-Control": content.cache_control}
    if content.content_length:
        headers["Content-Length"] = str(content.content_length)
    return StreamingResponse(
        content.chunks, media_type=content.content_type, headers=headers
    )


@router.post("/{document_id}/extract", response_model=ReceiptExtractionOut)
def extract_document(
    document_id: str,
    extractor: ReceiptExtractor = Depends(get_receipt_extractor),
) -> Response | ReceiptExtractionOut:
    """Read expense fields from a stored receipt image."""
    try:
        info = extractor.extract(document_id)
    except (ExtractionDisabledError, DocumentNotFoundError, StorageDisabledError) as exc:
        return JSONResponse({"error": str(exc)}, status_code=_status_for(exc))
    except Exception as exc:
        Log.exception(f"Extraction for document {document_id} failed: {exc}")
        return JSONResponse({"error": "extraction failed"}, status_code=500)
    return ReceiptExtractionOut.from_info(info)
