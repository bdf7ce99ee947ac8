"""Parsing of extended markdown into the document IR."""

from mdpress.formatting.ir import (
    TextStyle,
    InlineSpan,
    InlineRun,
    BlockRole,
    Heading,
    Paragraph,
    ListBlock,
    Rule,
    Block,
    Document,
)
from mdpress.formatting.inline import InlineFormatter
from mdpress.formatting.parser import MarkdownParser, escape_markup

__all__ = [
    "TextStyle",
    "InlineSpan",
    "InlineRun",
    "BlockRole",
    "Heading",
    "Paragraph",
    "ListBlock",
    "Rule",
    "Block",
    "Document",
    "InlineFormatter",
    "MarkdownParser",
    "escape_markup",
]
