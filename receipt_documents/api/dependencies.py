from fastapi import Request

from receipt_documents.documents.service import DocumentService
from receipt_documents.extraction.extractor import ReceiptExtractor


def get_document_service(request: Request) -> DocumentService:
    return request.app.state.document_service


def get_receipt_extractor(request: Request) -> ReceiptExtractor:
    return request.app.state.receipt_extractor
