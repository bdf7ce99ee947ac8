"""Intermediate Representation for parsed documents.

This module defines the data structures produced by the block parser and
consumed by the renderer. Everything here is immutable: a new Document is
built for every edit of the source text, never patched in place.
"""

import html
from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Optional, Union


# =============================================================================
# Inline level
# =============================================================================

class TextStyle(Flag):
    """Text styling flags (combinable with |)."""

    NONE = 0
    BOLD = auto()
    ITALIC = auto()


@dataclass(frozen=True)
class InlineSpan:
    """A contiguous piece of text with one set of decorations.

    Attributes:
        text: Markup-safe text (``&``, ``<`` and ``>`` already escaped once)
        style: Combined style flags (BOLD, ITALIC, or both)
        href: Link target when the span is part of a hyperlink
        centered: Whether the span sits in a centered run
        color: Hex value (``#0d9488``) or color name applied to the span
    """

    text: str
    style: TextStyle = TextStyle.NONE
    href: Optional[str] = None
    centered: bool = False
    color: Optional[str] = None

    @property
    def bold(self) -> bool:
        """Check if this span is bold."""
        return TextStyle.BOLD in self.style

    @property
    def italic(self) -> bool:
        """Check if this span is italic."""
        return TextStyle.ITALIC in self.style

    @property
    def plain(self) -> str:
        """The literal characters to draw."""
        return html.unescape(self.text)

    def __str__(self) -> str:
        return self.plain


@dataclass(frozen=True)
class InlineRun:
    """An ordered sequence of spans making up one line of formatted text."""

    spans: tuple[InlineSpan, ...] = ()

    @property
    def text(self) -> str:
        """Markup-safe text of the whole run, without decorations."""
        return "".join(span.text for span in self.spans)

    @property
    def plain_text(self) -> str:
        """Literal text of the whole run, without decorations."""
        return "".join(span.plain for span in self.spans)

    @property
    def has_centered(self) -> bool:
        return any(span.centered for span in self.spans)

    def __iter__(self):
        return iter(self.spans)

    def __len__(self) -> int:
        return len(self.spans)

    def __str__(self) -> str:
        return self.plain_text


# =============================================================================
# Block level
# =============================================================================

class BlockRole(str, Enum):
    """Semantic role of a paragraph.

    The first three paragraphs directly after a level-1 heading carry the
    title treatment of a resume-style document: subtitle, contact line and
    tagline. Every other paragraph is plain body text.
    """

    BODY = "body"
    SUBTITLE = "title-subtitle"
    CONTACT_LINE = "contact-line"
    TAGLINE = "tagline"


# Roles handed out, in order, to the paragraphs following an H1
TITLE_ROLES: tuple[BlockRole, ...] = (
    BlockRole.SUBTITLE,
    BlockRole.CONTACT_LINE,
    BlockRole.TAGLINE,
)


@dataclass(frozen=True)
class Heading:
    """A heading of level 1 to 3."""

    level: int
    inline: InlineRun = field(default_factory=InlineRun)

    kind = "heading"

    @property
    def plain_text(self) -> str:
        return self.inline.plain_text


@dataclass(frozen=True)
class Paragraph:
    """A paragraph; every entry in ``lines`` ends with a hard line break."""

    lines: tuple[InlineRun, ...] = ()
    role: BlockRole = BlockRole.BODY

    kind = "paragraph"

    @property
    def plain_text(self) -> str:
        return "\n".join(line.plain_text for line in self.lines)


@dataclass(frozen=True)
class ListBlock:
    """A group of consecutive bullet items."""

    items: tuple[InlineRun, ...] = ()

    kind = "list"

    @property
    def plain_text(self) -> str:
        return "\n".join(item.plain_text for item in self.items)


@dataclass(frozen=True)
class Rule:
    """A thematic break."""

    kind = "rule"

    @property
    def plain_text(self) -> str:
        return ""


Block = Union[Heading, Paragraph, ListBlock, Rule]


@dataclass(frozen=True)
class Document:
    """Complete parsed document ready for rendering.

    Attributes:
        blocks: Blocks in source order
    """

    blocks: tuple[Block, ...] = ()

    @property
    def plain_text(self) -> str:
        """Get all text content without styling."""
        return "\n\n".join(
            block.plain_text for block in self.blocks if block.plain_text
        )

    def __iter__(self):
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)
