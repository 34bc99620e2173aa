from functools import lru_cache
import logging

from fastapi import Request

from career_reimagined.application.ports.generative_ai import GenerativeAIPort
from career_reimagined.application.use_cases.career_session import CareerSession
from career_reimagined.application.use_cases.classify_subject import ClassifySubjectUseCase
from career_reimagined.application.use_cases.export_plan import ExportPlanUseCase
from career_reimagined.application.use_cases.generate_career_images import (
    GenerateCareerImagesUseCase,
    GenerateCareerImageUseCase,
)
from career_reimagined.application.use_cases.generate_career_plan import GenerateCareerPlanUseCase
from career_reimagined.core.config import settings
from career_reimagined.infrastructure.export.pillow_rasterizer import PillowBlockRasterizer
from career_reimagined.infrastructure.export.reportlab_writer import ReportLabDocumentWriter
from career_reimagined.infrastructure.llm.mock_ai_service import MockGenerativeService
from career_reimagined.infrastructure.llm.openai_ai_service import OpenAIGenerativeService

MOCK_ENVS = {"dev", "local", "test"}


@lru_cache
def get_ai_service() -> GenerativeAIPort:
    logger = logging.getLogger(__name__)
    logger.info("ENV=%s", settings.ENV)

    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        logger.info("Using OpenAIGenerativeService")
        return OpenAIGenerativeService()
    if settings.ENV.lower() in MOCK_ENVS:
        logger.info("Using MockGenerativeService (OPENAI_API_KEY missing, ENV=dev/local/test)")
        return MockGenerativeService()
    raise ValueError("OPENAI_API_KEY is required outside dev/local/test.")


def get_export_use_case() -> ExportPlanUseCase:
    return ExportPlanUseCase(new_writer=ReportLabDocumentWriter, rasterizer=PillowBlockRasterizer())


def build_session(ai: GenerativeAIPort | None = None) -> CareerSession:
    ai = ai or get_ai_service()
    return CareerSession(
        classify_subject=ClassifySubjectUseCase(ai=ai),
        generate_images=GenerateCareerImagesUseCase(single=GenerateCareerImageUseCase(ai=ai)),
        generate_plan=GenerateCareerPlanUseCase(ai=ai),
        export_plan=get_export_use_case(),
        max_upload_bytes=settings.MAX_UPLOAD_BYTES,
    )


def get_session(request: Request) -> CareerSession:
    return request.app.state.session
