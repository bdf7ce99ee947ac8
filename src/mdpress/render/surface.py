"""Laid-out visual tree handed from the renderer to the exporters.

All coordinates are in points, measured from the top-left corner of a
single continuous page that is 210 mm wide and as tall as its content
(never shorter than one A4 page).
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from mdpress.formatting.ir import Document
from mdpress.style.config import FontFamily
from mdpress.style.resolver import ResolvedStyle
from mdpress.units import mm_to_pt, pt_to_mm

A4_WIDTH_PT = mm_to_pt(210)
A4_HEIGHT_PT = mm_to_pt(297)


@dataclass(frozen=True)
class PlacedText:
    """A word (or word fragment) at its final position.

    Attributes:
        text: Literal characters to draw
        x: Left edge
        baseline: Baseline position
        width: Advance width
        family: Font family
        bold: Bold weight
        italic: Italic slant
        size: Font size
        color: Hex value or color name
        underline: Draw an underline below the text
        href: Link target, when the text belongs to a hyperlink
    """

    text: str
    x: float
    baseline: float
    width: float
    family: FontFamily
    bold: bool
    italic: bool
    size: float
    color: str
    underline: bool = False
    href: Optional[str] = None


@dataclass(frozen=True)
class Stroke:
    """A straight line such as a rule or heading border."""

    x1: float
    y1: float
    x2: float
    y2: float
    width: float
    color: str


@dataclass(frozen=True)
class PlacedLine:
    """One visual line of text."""

    top: float
    height: float
    baseline: float
    items: tuple[PlacedText, ...] = ()

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True)
class PlacedBlock:
    """A block of the document at its final position.

    Attributes:
        index: Position of the source block in the Document
        kind: Block kind ("heading", "paragraph", "list", "rule")
        rule_name: Name of the presentation rule applied
        top: Top of the border box
        height: Height of the border box
        lines: Text lines, in reading order
        strokes: Borders and rules
        markers: List bullets
    """

    index: int
    kind: str
    rule_name: str
    x: float
    top: float
    width: float
    height: float
    lines: tuple[PlacedLine, ...] = ()
    strokes: tuple[Stroke, ...] = ()
    markers: tuple[PlacedText, ...] = ()

    @property
    def bottom(self) -> float:
        return self.top + self.height

    def texts(self) -> Iterator[PlacedText]:
        yield from self.markers
        for line in self.lines:
            yield from line.items


@dataclass(frozen=True)
class RenderedSurface:
    """Fixed-width, variable-height page ready for export.

    Keeps the Document and ResolvedStyle it was laid out from so the
    print path can regenerate markup and a stylesheet for the same
    snapshot.
    """

    width: float
    height: float
    blocks: tuple[PlacedBlock, ...]
    document: Document
    style: ResolvedStyle
    background: str = "#ffffff"

    @property
    def width_mm(self) -> float:
        return pt_to_mm(self.width)

    @property
    def height_mm(self) -> float:
        return pt_to_mm(self.height)

    def texts(self) -> Iterator[PlacedText]:
        """Every placed piece of text, in reading order."""
        for block in self.blocks:
            yield from block.texts()

    def strokes(self) -> Iterator[Stroke]:
        for block in self.blocks:
            yield from block.strokes

    def page_count(self, page_height: float = A4_HEIGHT_PT) -> int:
        """Number of pages needed to slice the surface."""
        pages = int(self.height // page_height)
        if self.height - pages * page_height > 0.5:
            pages += 1
        return max(pages, 1)
