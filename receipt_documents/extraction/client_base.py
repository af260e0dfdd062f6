from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """Contract for provider-specific vision model clients."""

    @abstractmethod
    def create_vision_completion(
        self,
        *,
        model: str,
        prompt: str,
        image_url: str,
        json_schema: dict[str, object] | None = None,
    ) -> str:
        """Send one user turn with text and an image, return the reply text.

        When ``json_schema`` is given the provider is asked for output
        conforming to it.
        """
