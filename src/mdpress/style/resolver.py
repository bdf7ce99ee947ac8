"""Map a StyleConfig onto a closed set of presentation rules."""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from mdpress.formatting.ir import Block, BlockRole, Heading, ListBlock, Paragraph, Rule
from mdpress.style.config import FontFamily, StyleConfig
from mdpress.units import px_to_pt

PAGE_WIDTH_MM = 210.0
PAGE_HEIGHT_MM = 297.0
BODY_TEXT_COLOR = "#333333"
MUTED_TEXT_COLOR = "#666666"

# CSS font stacks used by the printable document
FONT_STACKS: dict[FontFamily, str] = {
    FontFamily.SANS_SERIF: "'Helvetica Neue', Helvetica, Arial, sans-serif",
    FontFamily.SERIF: "'Times New Roman', Georgia, serif",
    FontFamily.MONO: "'Courier New', monospace",
}

# Rule names
H1 = "h1"
H2 = "h2"
H3 = "h3"
PARAGRAPH = "paragraph"
LIST = "list"
LIST_ITEM = "list-item"
RULE = "rule"
LINK = "link"
SUBTITLE = BlockRole.SUBTITLE.value
CONTACT_LINE = BlockRole.CONTACT_LINE.value
TAGLINE = BlockRole.TAGLINE.value

RULE_NAMES: tuple[str, ...] = (
    H1, H2, H3, PARAGRAPH, LIST, LIST_ITEM, RULE, LINK, SUBTITLE, CONTACT_LINE, TAGLINE,
)


class Alignment(str, Enum):
    """Horizontal text alignment."""

    LEFT = "left"
    CENTER = "center"
    JUSTIFY = "justify"


@dataclass(frozen=True)
class Border:
    """A solid stroke; width in points."""

    width: float
    color: str


@dataclass(frozen=True)
class PresentationRule:
    """How one kind of block (or inline element) is presented.

    Sizes and spacing are in points. A ``color`` of None inherits the
    page text color.
    """

    font_size: float
    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: Optional[str] = None
    align: Alignment = Alignment.LEFT
    space_before: float = 0.0
    space_after: float = 0.0
    padding_bottom: float = 0.0
    indent: float = 0.0
    border_top: Optional[Border] = None
    border_bottom: Optional[Border] = None


@dataclass(frozen=True)
class PageRule:
    """Page-wide settings: base typography and the content insets."""

    font_family: FontFamily
    font_stack: str
    font_size: float
    line_height: float
    color: str
    margin_top: float
    margin_right: float
    margin_bottom: float
    margin_left: float
    width_mm: float = PAGE_WIDTH_MM
    min_height_mm: float = PAGE_HEIGHT_MM


@dataclass(frozen=True)
class ResolvedStyle:
    """Closed set of presentation rules consumed by the renderer."""

    page: PageRule
    rules: Mapping[str, PresentationRule]

    def rule(self, name: str) -> PresentationRule:
        return self.rules[name]

    def rule_for(self, block: Block) -> PresentationRule:
        """Return the rule that presents ``block``."""
        if isinstance(block, Heading):
            return self.rules[f"h{block.level}"]
        if isinstance(block, Paragraph):
            if block.role is BlockRole.BODY:
                return self.rules[PARAGRAPH]
            return self.rules[block.role.value]
        if isinstance(block, ListBlock):
            return self.rules[LIST]
        if isinstance(block, Rule):
            return self.rules[RULE]
        raise TypeError(f"Unknown block type: {type(block).__name__}")


def _align(centered: bool, otherwise: Alignment = Alignment.LEFT) -> Alignment:
    return Alignment.CENTER if centered else otherwise


def resolve_style(config: StyleConfig) -> ResolvedStyle:
    """Resolve a StyleConfig into presentation rules.

    Every field of the config maps to exactly one presentation effect.
    The function is pure: the same config always yields an equal result.
    """
    sizes = config.font_size
    body = float(sizes.body)
    small = max(body - 1, 1.0)
    accent = config.accent_color
    heading = config.heading_color

    page = PageRule(
        font_family=config.font_family,
        font_stack=FONT_STACKS[config.font_family],
        font_size=body,
        line_height=config.line_height,
        color=BODY_TEXT_COLOR,
        margin_top=float(config.margins.top),
        margin_right=float(config.margins.right),
        margin_bottom=float(config.margins.bottom),
        margin_left=float(config.margins.left),
    )

    rules = {
        H1: PresentationRule(
            font_size=float(sizes.h1),
            bold=True,
            color=heading,
            align=_align(config.center_h1),
            space_after=px_to_pt(8),
        ),
        H2: PresentationRule(
            font_size=float(sizes.h2),
            bold=True,
            color=heading,
            align=_align(config.center_h2),
            space_before=px_to_pt(16),
            space_after=px_to_pt(8),
            padding_bottom=px_to_pt(4),
            border_bottom=Border(px_to_pt(2), accent),
        ),
        H3: PresentationRule(
            font_size=float(sizes.h3),
            bold=True,
            color=accent,
            align=_align(config.center_h3),
            space_before=px_to_pt(12),
            space_after=px_to_pt(6),
        ),
        PARAGRAPH: PresentationRule(
            font_size=body,
            align=Alignment.JUSTIFY,
            space_before=px_to_pt(8),
            space_after=px_to_pt(8),
        ),
        SUBTITLE: PresentationRule(
            font_size=body,
            italic=True,
            color=accent,
            align=_align(config.center_first_paragraph, Alignment.JUSTIFY),
            space_before=px_to_pt(8),
            space_after=px_to_pt(8),
        ),
        CONTACT_LINE: PresentationRule(
            font_size=small,
            color=MUTED_TEXT_COLOR,
            align=Alignment.CENTER,
            space_before=px_to_pt(8),
            space_after=px_to_pt(8),
        ),
        TAGLINE: PresentationRule(
            font_size=small,
            italic=True,
            color=MUTED_TEXT_COLOR,
            align=Alignment.CENTER,
            space_before=px_to_pt(8),
            space_after=px_to_pt(8),
        ),
        LIST: PresentationRule(
            font_size=body,
            space_before=px_to_pt(8),
            space_after=px_to_pt(8),
            indent=px_to_pt(20),
        ),
        LIST_ITEM: PresentationRule(
            font_size=body,
            align=Alignment.JUSTIFY,
            space_before=px_to_pt(6),
            space_after=px_to_pt(6),
        ),
        RULE: PresentationRule(
            font_size=body,
            space_before=px_to_pt(16),
            space_after=px_to_pt(16),
            border_top=Border(px_to_pt(1.5), accent),
        ),
        LINK: PresentationRule(
            font_size=body,
            underline=True,
            color=accent,
        ),
    }

    return ResolvedStyle(page=page, rules=MappingProxyType(rules))
