"""Print fallback: a standalone printable HTML document."""

import tempfile
import webbrowser
from pathlib import Path
from typing import Callable, Optional

from mdpress.config import get_settings
from mdpress.export.base import HostUnavailable
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
from mdpress.render.surface import RenderedSurface
from mdpress.style.resolver import (
    CONTACT_LINE,
    H1,
    H2,
    H3,
    LINK,
    LIST,
    LIST_ITEM,
    PARAGRAPH,
    RULE,
    SUBTITLE,
    TAGLINE,
    PresentationRule,
    ResolvedStyle,
)

logger = get_logger(__name__)

# CSS selector for each presentation rule
SELECTORS: dict[str, str] = {
    H1: ".md-h1",
    H2: ".md-h2",
    H3: ".md-h3",
    PARAGRAPH: ".md-p",
    SUBTITLE: ".md-p.md-title-subtitle",
    CONTACT_LINE: ".md-p.md-contact-line",
    TAGLINE: ".md-p.md-tagline",
    LIST: ".md-ul",
    LIST_ITEM: ".md-li",
    RULE: ".md-hr",
    LINK: ".md-link",
}

_PRINT_SCRIPT = "<script>window.addEventListener('load', function () { window.print(); });</script>"


def _num(value: float) -> str:
    return f"{round(value, 3):g}"


class PrintExporter:
    """Hand the surface to the host's print dialog as a standalone document.

    Span text in the Document is escaped once by the parser, so it is
    emitted as is; only attribute values get their quotes escaped here.
    """

    def __init__(
        self,
        title: Optional[str] = None,
        opener: Callable[[str], bool] = webbrowser.open,
    ) -> None:
        self.title = title or get_settings().print_title
        self.opener = opener

    # =========================================================================
    # Document building
    # =========================================================================

    def build_document(self, surface: RenderedSurface, auto_print: bool = False) -> str:
        """Build the full HTML document for a surface snapshot."""
        css = self.build_stylesheet(surface.style)
        body = self.build_markup(surface.document)
        script = _PRINT_SCRIPT if auto_print else ""
        title = self.title.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")
        return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>{title}</title>
    <style>
      @page {{ size: A4; margin: 0; }}
      body {{ margin: 0; padding: 0; }}
{css}
    </style>
  </head>
  <body>
    <div class="preview-content">
{body}
    </div>
    {script}
  </body>
</html>
"""

    def build_stylesheet(self, style: ResolvedStyle) -> str:
        """Generate CSS for the resolved style."""
        page = style.page
        rules = [
            ".preview-content {"
            f" font-family: {page.font_stack};"
            f" font-size: {_num(page.font_size)}pt;"
            f" line-height: {_num(page.line_height)};"
            f" color: {page.color};"
            f" padding: {_num(page.margin_top)}mm {_num(page.margin_right)}mm"
            f" {_num(page.margin_bottom)}mm {_num(page.margin_left)}mm;"
            " background: white;"
            f" min-height: {_num(page.min_height_mm)}mm;"
            f" width: {_num(page.width_mm)}mm;"
            " box-sizing: border-box; }"
        ]
        for name, selector in SELECTORS.items():
            declarations = self._declarations(name, style.rule(name))
            rules.append(f"{selector} {{ {' '.join(declarations)} }}")
        rules.append(".md-center { display: block; text-align: center; }")
        rules.append("strong { font-weight: bold; }")
        rules.append("em { font-style: italic; }")
        return "\n".join(f"      {rule}" for rule in rules)

    @staticmethod
    def _declarations(name: str, rule: PresentationRule) -> list[str]:
        css = []
        if name != LINK:
            css.append(f"font-size: {_num(rule.font_size)}pt;")
            css.append(
                f"margin: {_num(rule.space_before)}pt 0 {_num(rule.space_after)}pt 0;"
            )
        if rule.bold:
            css.append("font-weight: bold;")
        if rule.italic:
            css.append("font-style: italic;")
        if rule.color:
            css.append(f"color: {rule.color};")
        if name not in (LINK, LIST, RULE):
            css.append(f"text-align: {rule.align.value};")
        if rule.indent:
            css.append(f"padding-left: {_num(rule.indent)}pt;")
        if rule.padding_bottom:
            css.append(f"padding-bottom: {_num(rule.padding_bottom)}pt;")
        if rule.border_bottom:
            border = rule.border_bottom
            css.append(f"border-bottom: {_num(border.width)}pt solid {border.color};")
        if rule.border_top:
            border = rule.border_top
            css.append("border: none;")
            css.append(f"border-top: {_num(border.width)}pt solid {border.color};")
        if rule.underline:
            css.append("text-decoration: underline;")
        return css

    def build_markup(self, document: Document) -> str:
        """Generate body markup for a document."""
        return "\n".join(f"      {self._block_to_html(block)}" for block in document.blocks)

    def _block_to_html(self, block: Block) -> str:
        if isinstance(block, Heading):
            tag = f"h{block.level}"
            return f'<{tag} class="md-{tag}">{self._run_to_html(block.inline)}</{tag}>'
        if isinstance(block, Paragraph):
            classes = "md-p"
            if block.role is not BlockRole.BODY:
                classes += f" md-{block.role.value}"
            lines = "<br/>".join(self._run_to_html(line) for line in block.lines)
            return f'<p class="{classes}">{lines}</p>'
        if isinstance(block, ListBlock):
            items = "".join(
                f'<li class="md-li">{self._run_to_html(item)}</li>' for item in block.items
            )
            return f'<ul class="md-ul">{items}</ul>'
        if isinstance(block, Rule):
            return '<hr class="md-hr"/>'
        raise TypeError(f"Unknown block type: {type(block).__name__}")

    def _run_to_html(self, run: InlineRun) -> str:
        """Convert a run to HTML, wrapping consecutive centered spans together."""
        parts: list[str] = []
        centered: list[str] = []
        for span in run.spans:
            html = self._span_to_html(span)
            if span.centered:
                centered.append(html)
                continue
            if centered:
                parts.append(f'<span class="md-center">{"".join(centered)}</span>')
                centered = []
            parts.append(html)
        if centered:
            parts.append(f'<span class="md-center">{"".join(centered)}</span>')
        return "".join(parts)

    @staticmethod
    def _span_to_html(span: InlineSpan) -> str:
        text = span.text
        if span.italic:
            text = f"<em>{text}</em>"
        if span.bold:
            text = f"<strong>{text}</strong>"
        if span.href:
            href = span.href.replace('"', "&quot;")
            if href.strip().lower().startswith("javascript:"):
                href = "#"
            text = f'<a href="{href}" class="md-link">{text}</a>'
        if span.color:
            text = f'<span style="color: {span.color}">{text}</span>'
        return text

    # =========================================================================
    # Output
    # =========================================================================

    def write(self, surface: RenderedSurface, path: Path, auto_print: bool = False) -> Path:
        """Write the print document to ``path``."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.build_document(surface, auto_print=auto_print), encoding="utf-8")
        return path

    def open(self, surface: RenderedSurface, path: Optional[Path] = None) -> Path:
        """Write the print document and open it in the host's browser.

        The document asks for the print dialog as soon as it loads.

        Raises:
            HostUnavailable: If the host could not open a window
        """
        if path is None:
            with tempfile.NamedTemporaryFile(
                prefix="mdpress-", suffix=".html", delete=False
            ) as handle:
                path = Path(handle.name)
        self.write(surface, path, auto_print=True)

        try:
            opened = self.opener(path.resolve().as_uri())
        except webbrowser.Error as e:
            raise HostUnavailable(f"Could not open print window: {e}") from e
        if not opened:
            raise HostUnavailable("Could not open print window")

        logger.info("Opened print document %s", path)
        return path
