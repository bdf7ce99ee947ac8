"""Pillow-backed page rasterizer."""

from PIL import Image, ImageColor, ImageDraw

from mdpress.export.base import PageRasterizer
from mdpress.log import get_logger
from mdpress.render.fonts import raster_font
from mdpress.render.surface import A4_HEIGHT_PT, PlacedText, RenderedSurface, Stroke
from mdpress.style.resolver import BODY_TEXT_COLOR
from mdpress.units import pt_to_px

logger = get_logger(__name__)

RGB = tuple[int, int, int]


def to_rgb(color: str, fallback: str = BODY_TEXT_COLOR) -> RGB:
    """Resolve a hex value or color name; unknown colors use ``fallback``."""
    try:
        return ImageColor.getrgb(color)[:3]
    except ValueError:
        logger.debug("Unknown color %r, using %s", color, fallback)
        return ImageColor.getrgb(fallback)[:3]


class PillowRasterizer(PageRasterizer):
    """Draw A4 slices of a surface with Pillow.

    The surface is one continuous page; page ``n`` shows the band
    ``[n * page_height, (n + 1) * page_height)``. Content that straddles
    a page edge is drawn on both pages, clipped by the image bounds.
    """

    def __init__(self, page_height: float = A4_HEIGHT_PT) -> None:
        self.page_height = page_height

    def render_page(self, surface: RenderedSurface, index: int, scale: float) -> Image.Image:
        if not 0 <= index < self.page_count(surface):
            raise IndexError(f"Page {index} out of range")

        top = index * self.page_height
        bottom = top + self.page_height
        size = (
            max(1, round(pt_to_px(surface.width, scale))),
            max(1, round(pt_to_px(self.page_height, scale))),
        )
        image = Image.new("RGB", size, to_rgb(surface.background, "#ffffff"))
        draw = ImageDraw.Draw(image)

        for stroke in surface.strokes():
            if top - stroke.width <= stroke.y1 <= bottom + stroke.width:
                self._draw_stroke(draw, stroke, top, scale)

        for text in surface.texts():
            if text.baseline + text.size < top or text.baseline - text.size > bottom:
                continue
            self._draw_text(draw, text, top, scale)

        return image

    @staticmethod
    def _draw_stroke(draw: ImageDraw.ImageDraw, stroke: Stroke, top: float, scale: float) -> None:
        draw.line(
            [
                (pt_to_px(stroke.x1, scale), pt_to_px(stroke.y1 - top, scale)),
                (pt_to_px(stroke.x2, scale), pt_to_px(stroke.y2 - top, scale)),
            ],
            fill=to_rgb(stroke.color),
            width=max(1, round(pt_to_px(stroke.width, scale))),
        )

    @staticmethod
    def _draw_text(draw: ImageDraw.ImageDraw, text: PlacedText, top: float, scale: float) -> None:
        font = raster_font(text.family, text.bold, text.italic, max(1, round(pt_to_px(text.size, scale))))
        fill = to_rgb(text.color)
        x = pt_to_px(text.x, scale)
        baseline = pt_to_px(text.baseline - top, scale)
        draw.text((x, baseline), text.text, font=font, fill=fill, anchor="ls")

        if text.underline:
            offset = pt_to_px(text.size * 0.12, scale)
            draw.line(
                [(x, baseline + offset), (x + pt_to_px(text.width, scale), baseline + offset)],
                fill=fill,
                width=max(1, round(pt_to_px(text.size / 16, scale))),
            )
