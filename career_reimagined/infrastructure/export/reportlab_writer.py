from __future__ import annotations

import io

from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from career_reimagined.application.ports.document import DocumentWriterPort, RasterImage
from career_reimagined.application.use_cases.export_plan import PageGeometry

REGULAR_FONT = "Helvetica"
BOLD_FONT = "Helvetica-Bold"


class ReportLabDocumentWriter(DocumentWriterPort):
    """PDF writer; converts top-left millimetre coordinates to ReportLab points."""

    def __init__(self, geometry: PageGeometry) -> None:
        self._buffer = io.BytesIO()
        self._page_height = geometry.height * mm
        self._canvas = canvas.Canvas(self._buffer, pagesize=(geometry.width * mm, self._page_height))

    def add_page(self) -> None:
        self._canvas.showPage()

    def wrap_text(self, text: str, font_size: float, bold: bool, max_width: float) -> list[str]:
        return simpleSplit(text or "", _font(bold), font_size, max_width * mm) or [""]

    def draw_text(
        self,
        lines: list[str],
        x: float,
        y: float,
        font_size: float,
        line_height: float,
        bold: bool = False,
        align: str = "left",
        color: tuple[int, int, int] = (0, 0, 0),
    ) -> None:
        c = self._canvas
        c.setFont(_font(bold), font_size)
        c.setFillColorRGB(*(channel / 255 for channel in color))
        for i, line in enumerate(lines):
            px = x * mm
            py = self._page_height - (y + i * line_height) * mm
            if align == "center":
                c.drawCentredString(px, py, line)
            elif align == "right":
                c.drawRightString(px, py, line)
            else:
                c.drawString(px, py, line)

    def draw_image(self, image: RasterImage, x: float, y: float, width: float, height: float) -> None:
        self._canvas.drawImage(
            ImageReader(io.BytesIO(image.png)),
            x * mm,
            self._page_height - (y + height) * mm,
            width=width * mm,
            height=height * mm,
        )

    def finish(self) -> bytes:
        self._canvas.save()
        return self._buffer.getvalue()


def _font(bold: bool) -> str:
    return BOLD_FONT if bold else REGULAR_FONT
