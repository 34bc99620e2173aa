from __future__ import annotations

import base64
import logging
from typing import Any

import httpx
from openai import AsyncOpenAI

from career_reimagined.application.exceptions import LLMContractError, LLMUpstreamError
from career_reimagined.application.ports.generative_ai import ContentPart, GenerativeAIPort
from career_reimagined.application.utils.data_url import to_data_url
from career_reimagined.application.utils.prompt_policy import CLASSIFY_PROMPT
from career_reimagined.core.config import settings


class OpenAIGenerativeService(GenerativeAIPort):
    """
    OpenAI-backed adapter implementing GenerativeAIPort.

    Contract guarantees:
    - classify_subject returns the raw answer text (may be empty)
    - generate_image returns the output parts of a Responses API call with the
      image_generation tool: generated images as inline data, messages as text
    - generate_plan returns JSON text produced under a strict json_schema
    - Raises:
        LLMUpstreamError: networking/provider failures (including refusals by the API)
        LLMContractError: a response with no usable content
    """

    def __init__(self) -> None:
        self.client = AsyncOpenAI(
            api_key=settings.OPENAI_API_KEY,
            http_client=httpx.AsyncClient(timeout=settings.OPENAI_TIMEOUT_SECONDS),
        )
        self._logger = logging.getLogger(__name__)

    async def classify_subject(self, image_bytes: bytes, mime_type: str) -> str:
        try:
            resp = await self.client.chat.completions.create(
                model=settings.OPENAI_MODEL_CLASSIFY,
                temperature=settings.OPENAI_TEMPERATURE_CLASSIFY,
                max_tokens=50,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "image_url", "image_url": {"url": to_data_url(image_bytes, mime_type)}},
                            {"type": "text", "text": CLASSIFY_PROMPT},
                        ],
                    }
                ],
            )
        except Exception as e:
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        return (resp.choices[0].message.content or "") if resp.choices else ""

    async def generate_image(self, image_bytes: bytes, mime_type: str, prompt: str) -> list[ContentPart]:
        try:
            resp = await self.client.responses.create(
                model=settings.OPENAI_MODEL_IMAGE,
                input=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "input_image", "image_url": to_data_url(image_bytes, mime_type)},
                            {"type": "input_text", "text": prompt},
                        ],
                    }
                ],
                tools=[{"type": "image_generation"}],
            )
        except Exception as e:
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        parts: list[ContentPart] = []
        for item in resp.output or []:
            item_type = getattr(item, "type", None)
            if item_type == "image_generation_call":
                result = getattr(item, "result", None)
                if result:
                    parts.append(ContentPart(inline_data=_b64(result), mime_type="image/png"))
            elif item_type == "message":
                for content in getattr(item, "content", None) or []:
                    text = getattr(content, "text", None) or getattr(content, "refusal", None)
                    if text:
                        parts.append(ContentPart(text=text))
        return parts

    async def generate_plan(self, prompt: str, schema: dict[str, Any]) -> str:
        try:
            resp = await self.client.chat.completions.create(
                model=settings.OPENAI_MODEL_PLAN,
                temperature=settings.OPENAI_TEMPERATURE_PLAN,
                messages=[
                    {"role": "system", "content": "Return only valid JSON. Do not include markdown or extra text."},
                    {"role": "user", "content": prompt},
                ],
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": "career_plan", "schema": schema, "strict": True},
                },
            )
        except Exception as e:
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise LLMContractError("LLM returned empty response text.")
        return content


def _b64(data: str) -> bytes:
    try:
        return base64.b64decode(data)
    except Exception as e:
        raise LLMContractError(f"Image payload is not valid base64: {e}") from e
