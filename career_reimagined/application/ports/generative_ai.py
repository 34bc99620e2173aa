from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ContentPart:
    """One part of a generated candidate: inline binary data, text, or both empty."""

    inline_data: bytes | None = field(default=None, repr=False)
    mime_type: str | None = None
    text: str | None = None


class GenerativeAIPort(ABC):
    @abstractmethod
    async def classify_subject(self, image_bytes: bytes, mime_type: str) -> str:
        """
        Describe the main subject of an image.

        Requirements:
        - Return the raw free-text answer (caller trims and applies fallbacks)
        - Raise LLMUpstreamError on network/provider failures

        Returns:
            Model text, possibly empty
        """
        raise NotImplementedError

    @abstractmethod
    async def generate_image(self, image_bytes: bytes, mime_type: str, prompt: str) -> list[ContentPart]:
        """
        Reimagine the reference image according to `prompt`.

        Requirements:
        - Return every part of the first candidate, in order
        - Parts carrying image data set `inline_data`; refusals/descriptions set `text`
        - Return an empty list if the provider produced no candidate
        - Raise LLMUpstreamError on network/provider failures (including safety blocks)
        """
        raise NotImplementedError

    @abstractmethod
    async def generate_plan(self, prompt: str, schema: dict[str, Any]) -> str:
        """
        Produce structured JSON text constrained to `schema`.

        Requirements:
        - Return the JSON text exactly as produced (caller decodes and validates)
        - Raise LLMUpstreamError on network/provider failures
        """
        raise NotImplementedError
