from __future__ import annotations

import asyncio
import logging
from typing import Callable, Sequence

from career_reimagined.application.exceptions import NoImageProducedError
from career_reimagined.application.ports.generative_ai import GenerativeAIPort
from career_reimagined.application.utils.data_url import to_data_url
from career_reimagined.application.utils.prompt_policy import policy_for_subject
from career_reimagined.domain.entities.career_image import CareerImage
from career_reimagined.domain.entities.photo import UploadedPhoto

IMAGE_FAILED_LABEL = "Failed to generate."


class GenerateCareerImageUseCase:
    def __init__(self, ai: GenerativeAIPort) -> None:
        self._ai = ai
        self._logger = logging.getLogger(__name__)

    async def execute(self, photo: UploadedPhoto, career: str, subject_descriptor: str) -> str:
        prompt = policy_for_subject(subject_descriptor).image_prompt(career, subject_descriptor)
        parts = await self._ai.generate_image(photo.data, photo.mime_type, prompt)

        for part in parts:
            if part.inline_data:
                return to_data_url(part.inline_data, "image/png")

        # text-only answers are refusals or descriptions
        text = next((p.text for p in parts if p.text), None)
        if text:
            self._logger.warning(
                "Image model returned text instead of an image",
                extra={"career": career, "reply_text": text[:200]},
            )
        raise NoImageProducedError(text=text)


class GenerateCareerImagesUseCase:
    """Fan out one image request per career and wait for all of them to settle."""

    def __init__(self, single: GenerateCareerImageUseCase) -> None:
        self._single = single
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        photo: UploadedPhoto,
        subject_descriptor: str,
        placeholders: Sequence[CareerImage],
        on_settled: Callable[[int, CareerImage], None] | None = None,
    ) -> list[CareerImage]:
        settled = list(placeholders)

        async def run(index: int, slot: CareerImage) -> None:
            try:
                url = await self._single.execute(photo, slot.career, subject_descriptor)
                record = slot.resolve(url)
            except Exception as e:
                self._logger.warning("Career image failed", extra={"career": slot.career, "reason": str(e)})
                record = slot.fail(IMAGE_FAILED_LABEL)
            settled[index] = record
            if on_settled is not None:
                on_settled(index, record)

        await asyncio.gather(*(run(i, slot) for i, slot in enumerate(placeholders)))
        return settled
