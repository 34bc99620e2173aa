from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable

from career_reimagined.application.exceptions import ExportError
from career_reimagined.application.ports.document import BlockRasterizerPort, ContentBlock, DocumentWriterPort
from career_reimagined.application.utils.data_url import parse_data_url
from career_reimagined.application.utils.plan_blocks import profile_blocks, roadmap_blocks
from career_reimagined.domain.entities.career_plan import CareerPlan

TITLE_COLOR = (8, 45, 15)
INTRO_COLOR = (60, 60, 60)

TITLE_FONT_SIZE = 26
TITLE_LINE_HEIGHT = 10.0
INTRO_FONT_SIZE = 11
INTRO_LINE_HEIGHT = 5.0
INTRO_GAP = 15.0
HEADER_FONT_SIZE = 16
HEADER_ADVANCE = 8.0
HEADER_RESERVE = 25.0
SECTION_GAP = 5.0
BLOCK_GAP = 5.0
MIN_PORTRAIT_HEIGHT = 40.0

PROFILE_HEADER = "Professional Profile"
ROADMAP_HEADER = "8-Week Roadmap"


@dataclass(frozen=True)
class PageGeometry:
    """A4 in millimetres."""

    width: float = 210.0
    height: float = 297.0
    margin: float = 20.0

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        return self.height - self.margin


@dataclass(frozen=True)
class Placement:
    page: int
    kind: str  # "title", "intro", "portrait", "header", "block"
    name: str
    top: float
    height: float


@dataclass(frozen=True)
class ExportedDocument:
    filename: str
    content: bytes
    page_count: int
    placements: tuple[Placement, ...]

    media_type: str = "application/pdf"


def plan_filename(career: str) -> str:
    return re.sub(r"\s+", "_", career) + "_Plan.pdf"


class _Layout:
    def __init__(self, writer: DocumentWriterPort, geometry: PageGeometry) -> None:
        self.writer = writer
        self.geometry = geometry
        self.page = 1
        self.cursor = geometry.margin
        self.placements: list[Placement] = []

    @property
    def page_is_empty(self) -> bool:
        return self.cursor <= self.geometry.margin

    def fits(self, height: float) -> bool:
        return self.cursor + height <= self.geometry.bottom_limit

    def new_page(self) -> None:
        self.writer.add_page()
        self.page += 1
        self.cursor = self.geometry.margin

    def break_for(self, height: float) -> None:
        # an oversized item still lands at the top of a fresh page rather than leaving a blank one
        if not self.fits(height) and not self.page_is_empty:
            self.new_page()

    def record(self, kind: str, name: str, top: float, height: float) -> None:
        self.placements.append(Placement(page=self.page, kind=kind, name=name, top=top, height=height))


class ExportPlanUseCase:
    def __init__(
        self,
        new_writer: Callable[[PageGeometry], DocumentWriterPort],
        rasterizer: BlockRasterizerPort,
        geometry: PageGeometry | None = None,
    ) -> None:
        self._new_writer = new_writer
        self._rasterizer = rasterizer
        self._geometry = geometry or PageGeometry()
        self._logger = logging.getLogger(__name__)

    def execute(self, plan: CareerPlan, career_image_url: str | None) -> ExportedDocument:
        try:
            writer = self._new_writer(self._geometry)
            layout = _Layout(writer, self._geometry)

            self._cover(layout, plan, career_image_url)

            layout.new_page()
            self._header(layout, PROFILE_HEADER)
            for block in profile_blocks(plan):
                self._block(layout, block)

            self._header(layout, ROADMAP_HEADER)
            for block in roadmap_blocks(plan):
                self._block(layout, block)

            content = writer.finish()
        except ExportError:
            raise
        except Exception as e:
            raise ExportError(f"Could not export plan for {plan.career!r}: {e}") from e

        filename = plan_filename(plan.career)
        self._logger.info("Plan exported", extra={"career": plan.career, "pages": layout.page})
        return ExportedDocument(
            filename=filename,
            content=content,
            page_count=layout.page,
            placements=tuple(layout.placements),
        )

    def _cover(self, layout: _Layout, plan: CareerPlan, career_image_url: str | None) -> None:
        g = self._geometry
        w = layout.writer

        title_lines = w.wrap_text(plan.career, TITLE_FONT_SIZE, True, g.content_width)
        w.draw_text(
            title_lines,
            x=g.width / 2,
            y=layout.cursor + 10,
            font_size=TITLE_FONT_SIZE,
            line_height=TITLE_LINE_HEIGHT,
            bold=True,
            align="center",
            color=TITLE_COLOR,
        )
        title_height = 15 + len(title_lines) * TITLE_LINE_HEIGHT
        layout.record("title", plan.career, layout.cursor, title_height)
        layout.cursor += title_height

        # a long intro continues on the next page instead of running past the margin
        remaining = w.wrap_text(plan.intro, INTRO_FONT_SIZE, False, g.content_width)
        while remaining:
            room = int((g.bottom_limit - layout.cursor) // INTRO_LINE_HEIGHT)
            if room < 1:
                layout.new_page()
                continue
            chunk, remaining = remaining[:room], remaining[room:]
            w.draw_text(
                chunk,
                x=g.margin,
                y=layout.cursor,
                font_size=INTRO_FONT_SIZE,
                line_height=INTRO_LINE_HEIGHT,
                color=INTRO_COLOR,
            )
            chunk_height = len(chunk) * INTRO_LINE_HEIGHT
            layout.record("intro", "intro", layout.cursor, chunk_height)
            layout.cursor += chunk_height
        layout.cursor += INTRO_GAP

        if not career_image_url:
            self._logger.info("No portrait to place on cover", extra={"career": plan.career})
            return

        try:
            _, raw = parse_data_url(career_image_url)
            portrait = self._rasterizer.load_image(raw)
        except Exception as e:
            raise ExportError(f"Portrait could not be decoded: {e}") from e
        if portrait.width <= 0 or portrait.height <= 0:
            raise ExportError("Portrait has no pixels.")

        max_height = g.bottom_limit - layout.cursor
        if max_height < MIN_PORTRAIT_HEIGHT:
            layout.new_page()
            max_height = g.bottom_limit - layout.cursor

        render_w = g.content_width
        render_h = portrait.height * g.content_width / portrait.width
        if render_h > max_height:
            render_h = max_height
            render_w = portrait.width * max_height / portrait.height

        x = (g.width - render_w) / 2
        w.draw_image(portrait, x, layout.cursor, render_w, render_h)
        layout.record("portrait", "portrait", layout.cursor, render_h)
        layout.cursor += render_h

    def _header(self, layout: _Layout, text: str) -> None:
        if not layout.fits(HEADER_RESERVE):
            layout.new_page()
        elif not layout.page_is_empty:
            layout.cursor += SECTION_GAP

        layout.writer.draw_text(
            [text],
            x=self._geometry.margin,
            y=layout.cursor,
            font_size=HEADER_FONT_SIZE,
            line_height=HEADER_ADVANCE,
            bold=True,
            color=TITLE_COLOR,
        )
        layout.record("header", text, layout.cursor, HEADER_ADVANCE)
        layout.cursor += HEADER_ADVANCE

    def _block(self, layout: _Layout, block: ContentBlock) -> None:
        raster = self._rasterizer.rasterize(block)
        if raster.width <= 0 or raster.height <= 0:
            raise ExportError(f"Block {block.block_id} rendered empty.")

        width = self._geometry.content_width
        height = raster.height * width / raster.width

        layout.break_for(height)
        layout.writer.draw_image(raster, self._geometry.margin, layout.cursor, width, height)
        layout.record("block", block.block_id, layout.cursor, height)
        layout.cursor += height + BLOCK_GAP
