"""
Shared fakes for the AI service port and the document ports.
"""

from __future__ import annotations

import asyncio
import io
import json
import random
from typing import Any

import pytest
from PIL import Image

from career_reimagined.application.exceptions import LLMUpstreamError
from career_reimagined.application.ports.document import (
    BlockRasterizerPort,
    ContentBlock,
    DocumentWriterPort,
    RasterImage,
)
from career_reimagined.application.ports.generative_ai import ContentPart, GenerativeAIPort
from career_reimagined.application.use_cases.career_session import CareerSession
from career_reimagined.application.use_cases.classify_subject import ClassifySubjectUseCase
from career_reimagined.application.use_cases.export_plan import ExportPlanUseCase
from career_reimagined.application.use_cases.generate_career_images import (
    GenerateCareerImagesUseCase,
    GenerateCareerImageUseCase,
)
from career_reimagined.application.use_cases.generate_career_plan import GenerateCareerPlanUseCase
from career_reimagined.domain.entities.photo import UploadedPhoto
from career_reimagined.infrastructure.export.pillow_rasterizer import PillowBlockRasterizer
from career_reimagined.infrastructure.export.reportlab_writer import ReportLabDocumentWriter


def make_png(width: int = 30, height: int = 40, colour: tuple[int, int, int] = (200, 120, 40)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (width, height), colour).save(buf, format="PNG")
    return buf.getvalue()


def make_plan_payload(career: str = "CEO", weeks: int = 8, **overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "career": career,
        "isFictional": False,
        "intro": f"Your path to becoming a {career}.",
        "skillsToDevelop": ["Leadership", "Finance"],
        "thoughtLeaders": [{"title": "Indra Nooyi", "url": "https://example.com/nooyi"}],
        "recommendedCourses": [{"title": "Strategy 101", "url": ""}],
        "targetCompanies": [{"title": "Acme Corp", "url": "https://acme.example"}],
        "weeks": [
            {
                "weekNumber": n,
                "theme": f"Theme {n}",
                "goals": [f"Goal {n}"],
                "actionItems": [f"Action {n}"],
            }
            for n in range(1, weeks + 1)
        ],
    }
    payload.update(overrides)
    return payload


class ScriptedAIService(GenerativeAIPort):
    """In-memory AI service whose answers and failures are set per test."""

    def __init__(self) -> None:
        self.subject: str | Exception = "Human"
        self.image_failures: dict[str, Exception] = {}
        self.text_only: dict[str, str] = {}
        self.plan_text: str | None = None
        self.plan_error: Exception | None = None
        self.classify_gate: asyncio.Event | None = None
        self.image_gate: asyncio.Event | None = None
        self.plan_gate: asyncio.Event | None = None

        self.classify_calls = 0
        self.classify_args: list[tuple[bytes, str]] = []
        self.image_prompts: list[str] = []
        self.plan_prompts: list[str] = []
        self.plan_schemas: list[dict[str, Any]] = []

    async def classify_subject(self, image_bytes: bytes, mime_type: str) -> str:
        self.classify_calls += 1
        self.classify_args.append((image_bytes, mime_type))
        if self.classify_gate is not None:
            await self.classify_gate.wait()
        if isinstance(self.subject, Exception):
            raise self.subject
        return self.subject

    async def generate_image(self, image_bytes: bytes, mime_type: str, prompt: str) -> list[ContentPart]:
        self.image_prompts.append(prompt)
        if self.image_gate is not None:
            await self.image_gate.wait()
        for career, error in self.image_failures.items():
            if f"as a {career}" in prompt:
                raise error
        for career, text in self.text_only.items():
            if f"as a {career}" in prompt:
                return [ContentPart(text=text)]
        return [ContentPart(text="Here you go"), ContentPart(inline_data=make_png(), mime_type="image/png")]

    async def generate_plan(self, prompt: str, schema: dict[str, Any]) -> str:
        self.plan_prompts.append(prompt)
        self.plan_schemas.append(schema)
        if self.plan_gate is not None:
            await self.plan_gate.wait()
        if self.plan_error is not None:
            raise self.plan_error
        if self.plan_text is not None:
            return self.plan_text
        career = prompt.split('becoming a "', 1)[1].split('"', 1)[0]
        return json.dumps(make_plan_payload(career))


class FixedHeightRasterizer(BlockRasterizerPort):
    """Every block is `width` x `heights.get(block_id, default)` pixels."""

    def __init__(self, heights: dict[str, int] | None = None, default: int = 170, width: int = 170) -> None:
        self.heights = heights or {}
        self.default = default
        self.width = width
        self.rasterized: list[str] = []

    def rasterize(self, block: ContentBlock) -> RasterImage:
        self.rasterized.append(block.block_id)
        return RasterImage(png=b"", width=self.width, height=self.heights.get(block.block_id, self.default))

    def load_image(self, data: bytes) -> RasterImage:
        return PillowBlockRasterizer().load_image(data)


class RecordingWriter(DocumentWriterPort):
    def __init__(self, geometry) -> None:
        self.geometry = geometry
        self.pages = 1
        self.texts: list[tuple[int, list[str], float]] = []
        self.images: list[tuple[int, float, float, float, float]] = []

    def add_page(self) -> None:
        self.pages += 1

    def wrap_text(self, text: str, font_size: float, bold: bool, max_width: float) -> list[str]:
        # roughly 2 mm per character at 11pt
        per_line = max(1, int(max_width / (font_size * 0.18)))
        return [text[i:i + per_line] for i in range(0, len(text), per_line)] or [""]

    def draw_text(self, lines, x, y, font_size, line_height, bold=False, align="left", color=(0, 0, 0)) -> None:
        self.texts.append((self.pages, list(lines), y))

    def draw_image(self, image: RasterImage, x: float, y: float, width: float, height: float) -> None:
        self.images.append((self.pages, x, y, width, height))

    def finish(self) -> bytes:
        return b"%PDF-fake"


@pytest.fixture
def ai() -> ScriptedAIService:
    return ScriptedAIService()


@pytest.fixture
def photo() -> UploadedPhoto:
    return UploadedPhoto(data=make_png(), mime_type="image/png", filename="pet.png")


@pytest.fixture
def make_session():
    def _make(ai: GenerativeAIPort, export: ExportPlanUseCase | None = None) -> CareerSession:
        return CareerSession(
            classify_subject=ClassifySubjectUseCase(ai=ai),
            generate_images=GenerateCareerImagesUseCase(single=GenerateCareerImageUseCase(ai=ai)),
            generate_plan=GenerateCareerPlanUseCase(ai=ai),
            export_plan=export or ExportPlanUseCase(new_writer=ReportLabDocumentWriter, rasterizer=PillowBlockRasterizer()),
            rng=random.Random(7),
        )

    return _make


@pytest.fixture
def upstream_error() -> LLMUpstreamError:
    return LLMUpstreamError("OpenAI API error: boom")


@pytest.fixture
def plan_payload():
    return make_plan_payload


@pytest.fixture
def png():
    return make_png


@pytest.fixture
def fake_export():
    """Export use case wired to FixedHeightRasterizer (1 px == 1 mm) and RecordingWriter."""

    def _make(heights: dict[str, int] | None = None, default: int = 170):
        rasterizer = FixedHeightRasterizer(heights, default=default)
        writers: list[RecordingWriter] = []

        def new_writer(geometry) -> RecordingWriter:
            writer = RecordingWriter(geometry)
            writers.append(writer)
            return writer

        return ExportPlanUseCase(new_writer=new_writer, rasterizer=rasterizer), rasterizer, writers

    return _make
