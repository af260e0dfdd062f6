from receipt_documents.extraction.extractor import ReceiptExtractor
from receipt_documents.extraction.factory import ExtractorFactory
from receipt_documents.extraction.models import ReceiptExtractedInfo

__all__ = ["ExtractorFactory", "ReceiptExtractedInfo", "ReceiptExtractor"]
