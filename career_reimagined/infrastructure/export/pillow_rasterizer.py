from __future__ import annotations

import io

from PIL import Image, ImageDraw, ImageFont

from career_reimagined.application.ports.document import BlockEntry, BlockRasterizerPort, ContentBlock, RasterImage

BLOCK_WIDTH_PX = 1280
PADDING_PX = 48
BACKGROUND = (255, 255, 255)
BORDER = (203, 213, 225)
BADGE_FILL = (22, 101, 52)

_STYLES: dict[str, tuple[int, tuple[int, int, int], int]] = {
    # style: (font size, colour, left indent)
    "body": (28, (51, 65, 85), 0),
    "strong": (30, (30, 41, 59), 0),
    "muted": (24, (100, 116, 139), 0),
    "label": (22, (148, 163, 184), 0),
    "bullet": (28, (51, 65, 85), 36),
}
HEADING_SIZE = 40


class PillowBlockRasterizer(BlockRasterizerPort):
    def __init__(self, width_px: int = BLOCK_WIDTH_PX) -> None:
        self._width = width_px
        self._fonts: dict[int, ImageFont.ImageFont | ImageFont.FreeTypeFont] = {}

    def rasterize(self, block: ContentBlock) -> RasterImage:
        ops: list[tuple[str, tuple, dict]] = []
        inner = self._width - 2 * PADDING_PX
        y = PADDING_PX

        heading_font = self._font(HEADING_SIZE)
        x = PADDING_PX
        if block.badge:
            badge_font = self._font(24)
            badge_w = int(badge_font.getlength(block.badge)) + 32
            ops.append(("rect", (x, y + 4, x + badge_w, y + 44), {"fill": BADGE_FILL}))
            ops.append(("text", (x + 16, y + 12), {"text": block.badge, "font": badge_font, "fill": (255, 255, 255)}))
            x += badge_w + 20
        for line in _wrap(block.heading, heading_font, PADDING_PX + inner - x):
            ops.append(("text", (x, y), {"text": line, "font": heading_font, "fill": (30, 41, 59)}))
            y += int(HEADING_SIZE * 1.35)
        y += 12
        ops.append(("line", ((PADDING_PX, y), (PADDING_PX + inner, y)), {"fill": (241, 245, 249), "width": 2}))
        y += 24

        for entry in block.entries:
            y = self._entry(ops, entry, y, inner)

        height = y + PADDING_PX
        img = Image.new("RGB", (self._width, height), BACKGROUND)
        draw = ImageDraw.Draw(img)
        draw.rounded_rectangle((2, 2, self._width - 3, height - 3), radius=16, outline=BORDER, width=3)
        for kind, args, kwargs in ops:
            if kind == "text":
                draw.text(args, kwargs["text"], font=kwargs["font"], fill=kwargs["fill"])
            elif kind == "rect":
                draw.rounded_rectangle(args, radius=6, fill=kwargs["fill"])
            elif kind == "dot":
                draw.ellipse(args, fill=kwargs["fill"])
            else:
                draw.line(args, fill=kwargs["fill"], width=kwargs["width"])
        return _encode(img)

    def load_image(self, data: bytes) -> RasterImage:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            return _encode(img.convert("RGB"))

    def _entry(self, ops: list, entry: BlockEntry, y: int, inner: int) -> int:
        size, colour, indent = _STYLES.get(entry.style, _STYLES["body"])
        font = self._font(size)
        text = entry.text.upper() if entry.style == "label" else entry.text
        if entry.style == "label":
            y += 12
        if entry.style == "bullet":
            cy = y + size // 2
            ops.append(("dot", (PADDING_PX + 6, cy - 6, PADDING_PX + 18, cy + 6), {"fill": (34, 197, 94)}))
        for line in _wrap(text, font, inner - indent):
            ops.append(("text", (PADDING_PX + indent, y), {"text": line, "font": font, "fill": colour}))
            y += int(size * 1.4)
        return y + 8

    def _font(self, size: int):
        if size not in self._fonts:
            self._fonts[size] = ImageFont.load_default(size=size)
        return self._fonts[size]


def _wrap(text: str, font, max_width: float) -> list[str]:
    lines: list[str] = []
    current = ""
    for word in (text or "").split():
        candidate = f"{current} {word}" if current else word
        if font.getlength(candidate) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
        # long tokens such as URLs are broken by character
        while font.getlength(word) > max_width and len(word) > 1:
            cut = len(word)
            while cut > 1 and font.getlength(word[:cut]) > max_width:
                cut -= 1
            lines.append(word[:cut])
            word = word[cut:]
        current = word
    if current:
        lines.append(current)
    return lines or [""]


def _encode(img: Image.Image) -> RasterImage:
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return RasterImage(png=buf.getvalue(), width=img.width, height=img.height)
