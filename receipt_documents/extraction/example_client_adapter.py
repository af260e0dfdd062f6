"""Example vision client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseExtractionClient and register the provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from receipt_documents.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Example adapter that returns a fixed receipt reply.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_REPLY: ClassVar[str] = "0,,,Example receipt"
    DEFAULT_STRUCTURED_REPLY: ClassVar[dict[str, object]] = {
        "amount": 0,
        "categoryId": None,
        "date": None,
        "title": "Example receipt",
    }

    def create_vision_completion(
        self,
        *,
        model: str,
        prompt: str,
        image_url: str,
        json_schema: dict[str, object] | None = None,
    ) -> str:
        _ = model, prompt, image_url
        if json_schema is not None:
            return json.dumps(self.DEFAULT_STRUCTURED_REPLY)
        return self.DEFAULT_REPLY
