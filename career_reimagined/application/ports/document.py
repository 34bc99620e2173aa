from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class RasterImage:
    png: bytes = field(repr=False)
    width: int
    height: int


@dataclass(frozen=True)
class BlockEntry:
    text: str
    style: str = "body"  # "body", "strong", "muted", "label", "bullet"


@dataclass(frozen=True)
class ContentBlock:
    block_id: str
    heading: str
    entries: Tuple[BlockEntry, ...] = ()
    badge: str | None = None


class BlockRasterizerPort(ABC):
    @abstractmethod
    def rasterize(self, block: ContentBlock) -> RasterImage:
        """Render one content block to a standalone PNG at a fixed pixel width."""
        raise NotImplementedError

    @abstractmethod
    def load_image(self, data: bytes) -> RasterImage:
        """Decode arbitrary image bytes and re-encode them as PNG. Raises on undecodable data."""
        raise NotImplementedError


class DocumentWriterPort(ABC):
    """
    One paginated document being written. Coordinates are millimetres measured
    from the top-left corner of the current page; text `y` is the baseline of
    the first line.
    """

    @abstractmethod
    def add_page(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def wrap_text(self, text: str, font_size: float, bold: bool, max_width: float) -> list[str]:
        raise NotImplementedError

    @abstractmethod
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
        raise NotImplementedError

    @abstractmethod
    def draw_image(self, image: RasterImage, x: float, y: float, width: float, height: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def finish(self) -> bytes:
        """Close the document and return its bytes."""
        raise NotImplementedError
