"""Lay out a parsed Document on a fixed-width page."""

import html
import re
from dataclasses import dataclass
from typing import Iterable, Optional

from mdpress.formatting.ir import (
    Block,
    BlockRole,
    Document,
    Heading,
    InlineRun,
    InlineSpan,
    ListBlock,
    Paragraph,
    Rule,
)
from mdpress.log import get_logger
from mdpress.render.fonts import ascent_descent, face_name, text_width
from mdpress.render.surface import PlacedBlock, PlacedLine, PlacedText, RenderedSurface, Stroke
from mdpress.style.resolver import (
    LINK,
    LIST_ITEM,
    Alignment,
    PresentationRule,
    ResolvedStyle,
)
from mdpress.units import mm_to_pt

logger = get_logger(__name__)

BULLET = "•"
# Narrowest content box allowed, whatever the margins
MIN_CONTENT_WIDTH = mm_to_pt(20)

_WHITESPACE = re.compile(r"(\s+)")


@dataclass(frozen=True)
class _Fragment:
    """Part of a word drawn with one span's decorations."""

    text: str
    span: InlineSpan
    width: float


_Word = tuple[_Fragment, ...]


class Renderer:
    """Position blocks top to bottom on a single continuous page.

    Text is measured with the standard PDF font metrics, so layout is
    deterministic and needs no installed fonts. No line is ever wider
    than the content box: words that do not fit on a line of their own
    are split between characters.
    """

    def render(self, document: Document, style: ResolvedStyle) -> RenderedSurface:
        """Lay out ``document`` using ``style``.

        Args:
            document: Parsed document
            style: Resolved presentation rules

        Returns:
            RenderedSurface sized to the page width
        """
        page = style.page
        width = mm_to_pt(page.width_mm)
        left = mm_to_pt(page.margin_left)
        right = mm_to_pt(page.margin_right)
        content_width = max(width - left - right, MIN_CONTENT_WIDTH)

        y = mm_to_pt(page.margin_top)
        previous_after: Optional[float] = None
        placed: list[PlacedBlock] = []

        for index, block in enumerate(document.blocks):
            rule = style.rule_for(block)
            # Vertical margins between neighbours collapse
            if previous_after is None:
                y += rule.space_before
            else:
                y += max(previous_after, rule.space_before)

            box = self._place_block(index, block, rule, style, left, y, content_width)
            placed.append(box)
            y = box.bottom
            previous_after = rule.space_after

        if previous_after is not None:
            y += previous_after
        y += mm_to_pt(page.margin_bottom)
        height = max(y, mm_to_pt(page.min_height_mm))

        logger.debug("Laid out %d block(s), surface height %.1fpt", len(placed), height)
        return RenderedSurface(
            width=width,
            height=height,
            blocks=tuple(placed),
            document=document,
            style=style,
        )

    def _place_block(
        self,
        index: int,
        block: Block,
        rule: PresentationRule,
        style: ResolvedStyle,
        x: float,
        top: float,
        width: float,
    ) -> PlacedBlock:
        if isinstance(block, Heading):
            lines, bottom = self._layout_runs([block.inline], rule, style, x, top, width)
            strokes: list[Stroke] = []
            if rule.border_bottom:
                bottom += rule.padding_bottom
                stroke_y = bottom + rule.border_bottom.width / 2
                strokes.append(Stroke(
                    x, stroke_y, x + width, stroke_y,
                    rule.border_bottom.width, rule.border_bottom.color,
                ))
                bottom += rule.border_bottom.width
            return PlacedBlock(
                index, block.kind, f"h{block.level}", x, top, width, bottom - top,
                lines=tuple(lines), strokes=tuple(strokes),
            )

        if isinstance(block, Paragraph):
            lines, bottom = self._layout_runs(block.lines, rule, style, x, top, width)
            rule_name = "paragraph" if block.role is BlockRole.BODY else block.role.value
            return PlacedBlock(
                index, block.kind, rule_name, x, top, width, bottom - top, lines=tuple(lines),
            )

        if isinstance(block, ListBlock):
            return self._place_list(index, block, rule, style, x, top, width)

        if isinstance(block, Rule):
            border = rule.border_top
            thickness = border.width if border else 0.0
            strokes = []
            if border:
                stroke_y = top + thickness / 2
                strokes.append(Stroke(x, stroke_y, x + width, stroke_y, thickness, border.color))
            return PlacedBlock(
                index, block.kind, "rule", x, top, width, thickness, strokes=tuple(strokes),
            )

        raise TypeError(f"Unknown block type: {type(block).__name__}")

    def _place_list(
        self,
        index: int,
        block: ListBlock,
        rule: PresentationRule,
        style: ResolvedStyle,
        x: float,
        top: float,
        width: float,
    ) -> PlacedBlock:
        item_rule = style.rule(LIST_ITEM)
        item_x = x + rule.indent
        item_width = max(width - rule.indent, MIN_CONTENT_WIDTH)
        color = rule.color or style.page.color

        lines: list[PlacedLine] = []
        markers: list[PlacedText] = []
        y = top
        for position, item in enumerate(block.items):
            # The list's own margins absorb the first and last item margins
            if position:
                y += max(item_rule.space_before, item_rule.space_after)
            item_lines, y = self._layout_runs([item], item_rule, style, item_x, y, item_width)
            if item_lines:
                first = item_lines[0]
                size = item_rule.font_size
                markers.append(PlacedText(
                    text=BULLET,
                    x=item_x - size * 0.9,
                    baseline=first.baseline,
                    width=text_width(BULLET, face_name(style.page.font_family), size),
                    family=style.page.font_family,
                    bold=False,
                    italic=False,
                    size=size,
                    color=color,
                ))
            lines.extend(item_lines)

        return PlacedBlock(
            index, block.kind, "list", x, top, width, y - top,
            lines=tuple(lines), markers=tuple(markers),
        )

    # =========================================================================
    # Text layout
    # =========================================================================

    def _layout_runs(
        self,
        runs: Iterable[InlineRun],
        rule: PresentationRule,
        style: ResolvedStyle,
        x: float,
        top: float,
        width: float,
    ) -> tuple[list[PlacedLine], float]:
        """Lay out hard lines of text; returns the lines and the bottom edge."""
        family = style.page.font_family
        size = rule.font_size
        line_height = size * style.page.line_height
        ascent, descent = ascent_descent(face_name(family, rule.bold, rule.italic), size)
        baseline_offset = (line_height - (ascent - descent)) / 2 + ascent

        lines: list[PlacedLine] = []
        y = top
        for run in runs:
            groups = self._groups(run)
            if not groups:
                # An empty hard line still takes up a line
                lines.append(PlacedLine(y, line_height, y + baseline_offset))
                y += line_height
                continue

            for centered, spans in groups:
                align = Alignment.CENTER if centered else rule.align
                words = self._words(spans, rule, style)
                wrapped = self._wrap(words, width, rule, style)
                for number, line_words in enumerate(wrapped):
                    last = number == len(wrapped) - 1
                    items = self._place_line(
                        line_words, align, last, rule, style, x, y + baseline_offset, width
                    )
                    lines.append(PlacedLine(y, line_height, y + baseline_offset, items))
                    y += line_height

        return lines, y

    @staticmethod
    def _groups(run: InlineRun) -> list[tuple[bool, list[InlineSpan]]]:
        """Split a run into consecutive groups of centered / uncentered spans.

        A centered span behaves like a block of its own, so it always
        starts and ends its own line group. Whitespace-only groups between
        centered groups collapse away.
        """
        groups: list[tuple[bool, list[InlineSpan]]] = []
        for span in run.spans:
            if groups and groups[-1][0] == span.centered:
                groups[-1][1].append(span)
            else:
                groups.append((span.centered, [span]))

        return [
            (centered, spans) for centered, spans in groups
            if "".join(span.plain for span in spans).strip()
        ]

    def _words(
        self, spans: list[InlineSpan], rule: PresentationRule, style: ResolvedStyle
    ) -> list[_Word]:
        """Break spans into words, collapsing whitespace like a browser."""
        words: list[_Word] = []
        current: list[_Fragment] = []
        for span in spans:
            for part in _WHITESPACE.split(span.plain):
                if not part:
                    continue
                if part.isspace():
                    if current:
                        words.append(tuple(current))
                        current = []
                    continue
                current.append(_Fragment(part, span, self._measure(part, span, rule, style)))
        if current:
            words.append(tuple(current))
        return words

    def _wrap(
        self,
        words: list[_Word],
        width: float,
        rule: PresentationRule,
        style: ResolvedStyle,
    ) -> list[list[_Word]]:
        """Greedy line filling."""
        lines: list[list[_Word]] = []
        line: list[_Word] = []
        used = 0.0

        for word in words:
            for piece in self._split_word(word, width, rule, style):
                piece_width = _word_width(piece)
                gap = self._space_width(line[-1], rule, style) if line else 0.0
                if line and used + gap + piece_width > width:
                    lines.append(line)
                    line, used = [piece], piece_width
                else:
                    line.append(piece)
                    used += gap + piece_width

        if line:
            lines.append(line)
        return lines

    def _split_word(
        self, word: _Word, width: float, rule: PresentationRule, style: ResolvedStyle
    ) -> list[_Word]:
        """Split a word wider than the line between characters."""
        if _word_width(word) <= width:
            return [word]

        pieces: list[_Word] = []
        current: list[_Fragment] = []
        used = 0.0
        for fragment in word:
            chars: list[str] = []
            for char in fragment.text:
                char_width = self._measure(char, fragment.span, rule, style)
                if (current or chars) and used + char_width > width:
                    if chars:
                        text = "".join(chars)
                        current.append(_Fragment(
                            text, fragment.span, self._measure(text, fragment.span, rule, style)
                        ))
                    pieces.append(tuple(current))
                    current, chars, used = [], [], 0.0
                chars.append(char)
                used += char_width
            if chars:
                text = "".join(chars)
                current.append(_Fragment(
                    text, fragment.span, self._measure(text, fragment.span, rule, style)
                ))
        if current:
            pieces.append(tuple(current))
        return pieces

    def _place_line(
        self,
        words: list[_Word],
        align: Alignment,
        last: bool,
        rule: PresentationRule,
        style: ResolvedStyle,
        x: float,
        baseline: float,
        width: float,
    ) -> tuple[PlacedText, ...]:
        gaps = [self._space_width(word, rule, style) for word in words[:-1]]
        natural = sum(_word_width(word) for word in words) + sum(gaps)
        slack = max(width - natural, 0.0)

        cursor = x
        extra = 0.0
        if align is Alignment.CENTER:
            cursor += slack / 2
        elif align is Alignment.JUSTIFY and not last and gaps:
            extra = slack / len(gaps)

        items: list[PlacedText] = []
        for position, word in enumerate(words):
            for fragment in word:
                items.append(self._placed_text(fragment, cursor, baseline, rule, style))
                cursor += fragment.width
            if position < len(gaps):
                cursor += gaps[position] + extra
        return tuple(items)

    # =========================================================================
    # Decorations
    # =========================================================================

    def _placed_text(
        self,
        fragment: _Fragment,
        x: float,
        baseline: float,
        rule: PresentationRule,
        style: ResolvedStyle,
    ) -> PlacedText:
        span = fragment.span
        link = style.rule(LINK)
        # Span color beats link color beats block color
        color = span.color or (link.color if span.href else None) or rule.color or style.page.color
        return PlacedText(
            text=fragment.text,
            x=x,
            baseline=baseline,
            width=fragment.width,
            family=style.page.font_family,
            bold=span.bold or rule.bold,
            italic=span.italic or rule.italic,
            size=rule.font_size,
            color=color,
            underline=bool(span.href) and link.underline,
            href=html.unescape(span.href) if span.href else None,
        )

    def _measure(
        self, text: str, span: InlineSpan, rule: PresentationRule, style: ResolvedStyle
    ) -> float:
        face = face_name(style.page.font_family, span.bold or rule.bold, span.italic or rule.italic)
        return text_width(text, face, rule.font_size)

    def _space_width(self, word: _Word, rule: PresentationRule, style: ResolvedStyle) -> float:
        return self._measure(" ", word[-1].span, rule, style)


def _word_width(word: _Word) -> float:
    return sum(fragment.width for fragment in word)
