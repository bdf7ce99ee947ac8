"""Main document conversion orchestrator."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from mdpress.export.pdf_exporter import RasterPdfExporter
from mdpress.export.print_exporter import PrintExporter
from mdpress.formatting.ir import Document
from mdpress.formatting.parser import MarkdownParser
from mdpress.log import get_logger
from mdpress.render.renderer import Renderer
from mdpress.render.surface import RenderedSurface
from mdpress.style.config import StyleConfig
from mdpress.style.resolver import resolve_style

logger = get_logger(__name__)


class ConversionError(Exception):
    """Error reading the inputs of a conversion."""

    pass


@dataclass(frozen=True)
class SourceStats:
    """Status-line figures for a source text."""

    characters: int
    lines: int


def source_stats(source: str) -> SourceStats:
    """Count characters and lines the way an editor status bar does."""
    return SourceStats(characters=len(source), lines=len(source.split("\n")))


def load_source(path: Path) -> str:
    """Read a markdown file.

    Raises:
        ConversionError: If the file is missing or not UTF-8 text
    """
    if not path.exists():
        raise ConversionError(f"Input file not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConversionError(f"Could not read {path}: {e}") from e


def load_style(path: Optional[Path]) -> StyleConfig:
    """Load a style config JSON file, or the defaults when no file is given.

    Raises:
        ConversionError: If the file is missing or not a JSON object
    """
    if path is None:
        return StyleConfig()
    if not path.exists():
        raise ConversionError(f"Style file not found: {path}")
    try:
        return StyleConfig.from_json_file(path)
    except (OSError, ValueError) as e:
        raise ConversionError(f"Invalid style file {path}: {e}") from e


class DocumentConverter:
    """Orchestrates the document pipeline.

    Pipeline:
    1. Parse markdown source into a Document
    2. Resolve the StyleConfig into presentation rules
    3. Lay out the Document on an A4-wide surface
    4. Export the surface as a PDF, or hand it to the print fallback

    Every call works on fresh snapshots: nothing is cached between
    renders, so a changed source or style always produces a new surface.
    """

    def __init__(
        self,
        parser: Optional[MarkdownParser] = None,
        renderer: Optional[Renderer] = None,
        pdf_exporter: Optional[RasterPdfExporter] = None,
        print_exporter: Optional[PrintExporter] = None,
    ) -> None:
        self.parser = parser or MarkdownParser()
        self.renderer = renderer or Renderer()
        self.pdf_exporter = pdf_exporter or RasterPdfExporter()
        self.print_exporter = print_exporter or PrintExporter()

    def parse(self, source: str) -> Document:
        """Parse source text without rendering."""
        return self.parser.parse(source)

    def render(self, source: str, style: Optional[StyleConfig] = None) -> RenderedSurface:
        """Parse, resolve and lay out ``source``."""
        document = self.parser.parse(source)
        resolved = resolve_style(style or StyleConfig())
        return self.renderer.render(document, resolved)

    async def export_pdf(
        self, source: str, output_path: Path, style: Optional[StyleConfig] = None
    ) -> Path:
        """Render ``source`` and export it as a PDF.

        Raises:
            ExportFailure: If rasterization fails; offer the print fallback
            ExportInProgressError: If an export is already running
        """
        surface = self.render(source, style)
        logger.info("Exporting %.0fmm tall surface to %s", surface.height_mm, output_path)
        return await self.pdf_exporter.export(surface, output_path)

    def print_document(
        self,
        source: str,
        style: Optional[StyleConfig] = None,
        path: Optional[Path] = None,
        open_window: bool = True,
    ) -> Path:
        """Render ``source`` through the print fallback.

        With ``open_window`` the document is opened in the host browser
        with the print dialog; otherwise it is only written to ``path``.

        Raises:
            HostUnavailable: If the host refused to open a window
        """
        surface = self.render(source, style)
        if open_window:
            return self.print_exporter.open(surface, path)
        if path is None:
            raise ValueError("path is required when open_window is False")
        return self.print_exporter.write(surface, path)
