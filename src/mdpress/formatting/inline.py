"""Inline formatter: turns one line of escaped text into styled spans."""

import re
from typing import Iterable, Optional

from mdpress.formatting.ir import InlineRun, InlineSpan, TextStyle


class InlineFormatter:
    """Resolve centering, color, emphasis and links inside a line.

    Input text is expected to be escaped already, so the centering
    delimiters are matched in their escaped form (``-&gt;`` / ``&lt;-``).
    Resolution works in passes over the text rather than by substituting
    markup back into it, so a resolved span is never matched twice.

    Malformed markup is never an error: an unterminated delimiter is
    kept as literal text.
    """

    # ->text<-, {color}->text<- or ->{color}text<-, nearest closing delimiter
    CENTER_PATTERN = re.compile(
        r"(?:\{(#[0-9a-fA-F]{3,6}|[A-Za-z]+)\})?-&gt;(?:\{(#?[A-Za-z0-9]+)\})?(.+?)&lt;-"
    )
    # ">> " line prefix (alternate centering dialect)
    CENTER_LINE_PREFIX = "&gt;&gt; "
    # {#hex}, {name}, or the {/} reset
    COLOR_PATTERN = re.compile(r"\{(?:(#[0-9a-fA-F]{3,6}|[A-Za-z]+)|(/))\}")
    LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

    def format(self, text: str, color: Optional[str] = None) -> InlineRun:
        """Format a single line into an InlineRun."""
        run, _ = self.format_line(text, color)
        return run

    def format_lines(self, lines: Iterable[str]) -> tuple[InlineRun, ...]:
        """Format the lines of one block.

        Emphasis and centering never cross a line, but a standalone color
        tag stays active until the end of the block, the next color tag,
        or an explicit ``{/}`` reset.
        """
        runs: list[InlineRun] = []
        color: Optional[str] = None
        for line in lines:
            run, color = self.format_line(line, color)
            runs.append(run)
        return tuple(runs)

    def format_line(
        self, text: str, color: Optional[str] = None
    ) -> tuple[InlineRun, Optional[str]]:
        """Format one line, returning the run and the color still active."""
        line_centered = False
        if text.startswith(self.CENTER_LINE_PREFIX):
            text = text[len(self.CENTER_LINE_PREFIX):]
            line_centered = True

        spans: list[InlineSpan] = []
        pos = 0
        for match in self.CENTER_PATTERN.finditer(text):
            outside, color = self._resolve_colors(
                text[pos:match.start()], color, line_centered
            )
            spans.extend(outside)

            # Color set inside a centered run ends with the run
            inner_color = match.group(2) or match.group(1) or color
            inner, _ = self._resolve_colors(match.group(3), inner_color, True)
            spans.extend(inner)
            pos = match.end()

        tail, color = self._resolve_colors(text[pos:], color, line_centered)
        spans.extend(tail)
        return InlineRun(spans=tuple(spans)), color

    def _resolve_colors(
        self, text: str, color: Optional[str], centered: bool
    ) -> tuple[list[InlineSpan], Optional[str]]:
        """Split text at color tags and format each piece."""
        spans: list[InlineSpan] = []
        pos = 0
        for match in self.COLOR_PATTERN.finditer(text):
            is_reset = match.group(2) is not None
            # A color tag must be followed by text on the same line
            if not is_reset and match.end() >= len(text):
                continue
            spans.extend(
                self._tokenize(text[pos:match.start()], TextStyle.NONE, None, centered, color)
            )
            color = None if is_reset else match.group(1)
            pos = match.end()

        spans.extend(self._tokenize(text[pos:], TextStyle.NONE, None, centered, color))
        return spans, color

    def _tokenize(
        self,
        text: str,
        style: TextStyle,
        href: Optional[str],
        centered: bool,
        color: Optional[str],
    ) -> list[InlineSpan]:
        """Tokenize emphasis and links into spans.

        Handles:
        - ***bold italic***
        - **bold**
        - *italic*
        - [label](target)
        - plain text

        Emphasis content and link labels are tokenized recursively, so
        markers nest (``*see [the **docs**](url)*``).
        """
        spans: list[InlineSpan] = []
        plain: list[str] = []

        def flush() -> None:
            if plain:
                spans.append(InlineSpan("".join(plain), style, href, centered, color))
                plain.clear()

        def nested(content: str, inner_style: TextStyle, inner_href: Optional[str]) -> None:
            flush()
            spans.extend(self._tokenize(content, inner_style, inner_href, centered, color))

        pos = 0
        while pos < len(text):
            # Bold-italic (***), content must not be empty
            if text.startswith("***", pos):
                end = text.find("***", pos + 4)
                if end != -1:
                    nested(text[pos + 3:end], style | TextStyle.BOLD | TextStyle.ITALIC, href)
                    pos = end + 3
                    continue

            # Bold (**)
            if text.startswith("**", pos):
                end = self._find_bold_close(text, pos + 2)
                if end != -1:
                    nested(text[pos + 2:end], style | TextStyle.BOLD, href)
                    pos = end + 2
                    continue

            # Italic (*)
            if text[pos] == "*" and not text.startswith("**", pos):
                end = self._find_italic_close(text, pos + 1)
                if end != -1:
                    nested(text[pos + 1:end], style | TextStyle.ITALIC, href)
                    pos = end + 1
                    continue

            # Link, never inside another link
            if text[pos] == "[" and href is None:
                match = self.LINK_PATTERN.match(text, pos)
                if match:
                    nested(match.group(1), style, match.group(2))
                    pos = match.end()
                    continue

            # No closing marker found, treat as plain text
            plain.append(text[pos])
            pos += 1

        flush()
        return spans

    @staticmethod
    def _find_bold_close(text: str, start: int) -> int:
        """Find the closing ``**``, stepping over an italic opened inside.

        In ``**a *b***`` the first ``*`` of the trailing ``***`` closes the
        inner italic and the last two close the bold.
        """
        italic_open = False
        pos = start
        while pos < len(text):
            if italic_open and text.startswith("***", pos):
                return pos + 1
            if text.startswith("**", pos):
                if not italic_open and pos > start:
                    return pos
                pos += 2
                continue
            if text[pos] == "*":
                italic_open = not italic_open
            pos += 1
        return text.find("**", start + 1)

    @staticmethod
    def _find_italic_close(text: str, start: int) -> int:
        """Find the closing single ``*``, stepping over ``**`` pairs."""
        pos = start
        while pos < len(text):
            if text.startswith("**", pos):
                pos += 2
                continue
            if text[pos] == "*":
                return pos if pos > start else -1
            pos += 1
        return -1
