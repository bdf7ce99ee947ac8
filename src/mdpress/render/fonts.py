"""Font faces for text measurement and rasterization."""

from functools import lru_cache

from PIL import ImageFont
from reportlab.pdfbase import pdfmetrics

from mdpress.log import get_logger
from mdpress.style.config import FontFamily

logger = get_logger(__name__)

# Standard Type-1 faces: (regular, bold, italic, bold italic)
PDF_FACES: dict[FontFamily, tuple[str, str, str, str]] = {
    FontFamily.SANS_SERIF: (
        "Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique",
    ),
    FontFamily.SERIF: (
        "Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic",
    ),
    FontFamily.MONO: (
        "Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique",
    ),
}

# TrueType files tried, in order, when drawing page images
TRUETYPE_CANDIDATES: dict[FontFamily, tuple[tuple[str, ...], ...]] = {
    FontFamily.SANS_SERIF: (
        ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "Arial.ttf", "arial.ttf"),
        ("DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf"),
        ("DejaVuSans-Oblique.ttf", "LiberationSans-Italic.ttf", "Arial Italic.ttf", "ariali.ttf"),
        ("DejaVuSans-BoldOblique.ttf", "LiberationSans-BoldItalic.ttf",
         "Arial Bold Italic.ttf", "arialbi.ttf"),
    ),
    FontFamily.SERIF: (
        ("DejaVuSerif.ttf", "LiberationSerif-Regular.ttf", "Times New Roman.ttf", "times.ttf"),
        ("DejaVuSerif-Bold.ttf", "LiberationSerif-Bold.ttf",
         "Times New Roman Bold.ttf", "timesbd.ttf"),
        ("DejaVuSerif-Italic.ttf", "LiberationSerif-Italic.ttf",
         "Times New Roman Italic.ttf", "timesi.ttf"),
        ("DejaVuSerif-BoldItalic.ttf", "LiberationSerif-BoldItalic.ttf",
         "Times New Roman Bold Italic.ttf", "timesbi.ttf"),
    ),
    FontFamily.MONO: (
        ("DejaVuSansMono.ttf", "LiberationMono-Regular.ttf", "Courier New.ttf", "cour.ttf"),
        ("DejaVuSansMono-Bold.ttf", "LiberationMono-Bold.ttf",
         "Courier New Bold.ttf", "courbd.ttf"),
        ("DejaVuSansMono-Oblique.ttf", "LiberationMono-Italic.ttf",
         "Courier New Italic.ttf", "couri.ttf"),
        ("DejaVuSansMono-BoldOblique.ttf", "LiberationMono-BoldItalic.ttf",
         "Courier New Bold Italic.ttf", "courbi.ttf"),
    ),
}


def _variant(bold: bool, italic: bool) -> int:
    return (2 if italic else 0) + (1 if bold else 0)


def face_name(family: FontFamily, bold: bool = False, italic: bool = False) -> str:
    """Return the standard PDF face for a family and weight/slant."""
    return PDF_FACES[family][_variant(bold, italic)]


def text_width(text: str, face: str, size: float) -> float:
    """Width of ``text`` in points."""
    return pdfmetrics.stringWidth(text, face, size)


def ascent_descent(face: str, size: float) -> tuple[float, float]:
    """Ascent and (negative) descent of a face in points."""
    return pdfmetrics.getAscentDescent(face, size)


@lru_cache(maxsize=128)
def raster_font(
    family: FontFamily, bold: bool, italic: bool, size_px: int
) -> ImageFont.FreeTypeFont:
    """Load a Pillow font for drawing at ``size_px`` pixels.

    Falls back to Pillow's bundled scalable font when no system
    TrueType file of the family is installed.
    """
    for candidate in TRUETYPE_CANDIDATES[family][_variant(bold, italic)]:
        try:
            return ImageFont.truetype(candidate, size_px)
        except OSError:
            continue
    logger.debug("No TrueType font for %s, using Pillow default", family.value)
    return ImageFont.load_default(size=size_px)
