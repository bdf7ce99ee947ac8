"""Markdown parser for converting extended markdown source to IR."""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from mdpress.formatting.inline import InlineFormatter
from mdpress.formatting.ir import (
    TITLE_ROLES,
    Block,
    BlockRole,
    Document,
    Heading,
    ListBlock,
    Paragraph,
    Rule,
)
from mdpress.log import get_logger

logger = get_logger(__name__)


def escape_markup(text: str) -> str:
    """Escape the three markup-significant characters exactly once."""
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class TokenType(Enum):
    """Coarse line classification used by the block pass."""

    BLANK = "blank"
    RULE = "rule"
    HEADING = "heading"
    LIST_ITEM = "list_item"
    TEXT = "text"


@dataclass(frozen=True)
class LineToken:
    """One classified source line."""

    type: TokenType
    text: str = ""
    level: int = 0


class MarkdownParser:
    """Parse extended markdown into a structured Document.

    Parsing runs in two passes: every line is first classified into a
    coarse token (heading, rule, list item, text, blank), then tokens are
    grouped into blocks and only text payloads go through the inline
    formatter. The parser never rejects input.
    """

    # Regex patterns for block markers (applied to escaped lines)
    RULE_PATTERN = re.compile(r"^---$")
    HEADING_PATTERN = re.compile(r"^(#{1,3}) (.+)$")
    LIST_ITEM_PATTERN = re.compile(r"^- (.+)$")

    def __init__(self, formatter: Optional[InlineFormatter] = None) -> None:
        self.formatter = formatter or InlineFormatter()

    def parse(self, source: str) -> Document:
        """Convert markdown source to a Document.

        Args:
            source: Raw markdown text as typed by the user

        Returns:
            Document with blocks in source order
        """
        text = source.replace("\r\n", "\n").replace("\r", "\n")
        text = escape_markup(text)

        tokens = [self.classify(line) for line in text.split("\n")]
        blocks = self._assign_roles(list(self._assemble(tokens)))

        logger.debug("Parsed %d line(s) into %d block(s)", len(tokens), len(blocks))
        return Document(blocks=tuple(blocks))

    def classify(self, line: str) -> LineToken:
        """Classify one escaped source line."""
        if not line.strip():
            return LineToken(TokenType.BLANK)

        if self.RULE_PATTERN.match(line):
            return LineToken(TokenType.RULE)

        match = self.HEADING_PATTERN.match(line)
        if match:
            return LineToken(TokenType.HEADING, match.group(2), len(match.group(1)))

        match = self.LIST_ITEM_PATTERN.match(line)
        if match:
            return LineToken(TokenType.LIST_ITEM, match.group(1))

        return LineToken(TokenType.TEXT, line)

    def _assemble(self, tokens: list[LineToken]) -> Iterator[Block]:
        """Group line tokens into blocks."""
        pending_text: list[str] = []
        pending_items: list[str] = []

        def flush() -> Iterator[Block]:
            if pending_items:
                yield ListBlock(items=tuple(
                    self.formatter.format(item) for item in pending_items
                ))
                pending_items.clear()
            if pending_text:
                yield Paragraph(lines=self.formatter.format_lines(pending_text))
                pending_text.clear()

        for token in tokens:
            if token.type is TokenType.LIST_ITEM:
                if pending_text:
                    yield from flush()
                pending_items.append(token.text)
                continue

            if token.type is TokenType.TEXT:
                if pending_items:
                    yield from flush()
                pending_text.append(token.text)
                continue

            # Blank lines, headings and rules all close the open block
            yield from flush()
            if token.type is TokenType.HEADING:
                yield Heading(level=token.level, inline=self.formatter.format(token.text))
            elif token.type is TokenType.RULE:
                yield Rule()

        yield from flush()

    @staticmethod
    def _assign_roles(blocks: list[Block]) -> list[Block]:
        """Tag the paragraphs directly following an H1 with title roles."""
        result: list[Block] = []
        chain: Optional[int] = None

        for block in blocks:
            if isinstance(block, Heading):
                chain = 0 if block.level == 1 else None
            elif isinstance(block, Paragraph) and chain is not None and chain < len(TITLE_ROLES):
                block = Paragraph(lines=block.lines, role=TITLE_ROLES[chain])
                chain += 1
            else:
                chain = None
            result.append(block)

        return result
