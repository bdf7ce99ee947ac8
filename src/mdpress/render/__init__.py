"""Layout of parsed documents onto a fixed-width page."""

from mdpress.render.renderer import Renderer
from mdpress.render.surface import (
    A4_HEIGHT_PT,
    A4_WIDTH_PT,
    PlacedBlock,
    PlacedLine,
    PlacedText,
    RenderedSurface,
    Stroke,
)

__all__ = [
    "Renderer",
    "A4_HEIGHT_PT",
    "A4_WIDTH_PT",
    "PlacedBlock",
    "PlacedLine",
    "PlacedText",
    "RenderedSurface",
    "Stroke",
]
