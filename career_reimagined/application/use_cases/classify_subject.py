from __future__ import annotations

import logging

from career_reimagined.application.ports.generative_ai import GenerativeAIPort
from career_reimagined.domain.entities.career_catalog import HUMAN_SUBJECT
from career_reimagined.domain.entities.photo import UploadedPhoto


class ClassifySubjectUseCase:
    def __init__(self, ai: GenerativeAIPort) -> None:
        self._ai = ai
        self._logger = logging.getLogger(__name__)

    async def execute(self, photo: UploadedPhoto) -> str:
        """Return "Human" or a species description. Never raises on provider failure."""
        try:
            text = await self._ai.classify_subject(photo.data, photo.mime_type)
        except Exception as e:
            self._logger.warning("Subject detection failed, assuming human", extra={"reason": str(e)})
            return HUMAN_SUBJECT

        subject = (text or "").strip().strip('"').strip()
        if not subject:
            self._logger.warning("Subject detection returned no text, assuming human")
            return HUMAN_SUBJECT

        self._logger.info("Detected subject", extra={"subject": subject})
        return subject
