"""Rasterize-and-paginate PDF exporter."""

import asyncio
import io
from pathlib import Path
from typing import Callable, Optional

from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from mdpress.config import get_settings
from mdpress.export.base import ExportFailure, ExportInProgressError, PageRasterizer
from mdpress.export.rasterizer import PillowRasterizer
from mdpress.log import get_logger
from mdpress.render.surface import RenderedSurface

logger = get_logger(__name__)


class RasterPdfExporter:
    """Export a surface as a PDF of full-page images.

    Each A4 slice of the surface is drawn to an image, encoded as JPEG
    and placed edge to edge on an A4 PDF page. Margins are part of the
    surface, so the PDF pages themselves have none.

    Only one export may run at a time per exporter; a second call while
    one is in flight raises ExportInProgressError without starting any
    rasterization.
    """

    def __init__(
        self,
        rasterizer_factory: Optional[Callable[[], PageRasterizer]] = None,
        scale: Optional[float] = None,
        jpeg_quality: Optional[float] = None,
        max_pages: Optional[int] = None,
    ) -> None:
        """Initialize the exporter.

        Args:
            rasterizer_factory: Builds the page rasterizer (default: Pillow)
            scale: Device pixels per CSS pixel
            jpeg_quality: JPEG quality between 0 and 1
            max_pages: Refuse surfaces longer than this many pages
        """
        settings = get_settings()
        self.rasterizer_factory = rasterizer_factory or PillowRasterizer
        self.scale = scale or settings.raster_scale
        self.jpeg_quality = jpeg_quality or settings.jpeg_quality
        self.max_pages = max_pages or settings.max_pages
        self._in_flight = False

    @property
    def is_exporting(self) -> bool:
        """Whether an export is currently running."""
        return self._in_flight

    async def export(self, surface: RenderedSurface, path: Path) -> Path:
        """Rasterize the surface and write it to ``path``.

        Args:
            surface: Surface snapshot to export
            path: Output PDF file

        Returns:
            The path written

        Raises:
            ExportInProgressError: If another export is still running
            ExportFailure: If rasterization or writing fails
        """
        # Checked and set before the first await
        if self._in_flight:
            raise ExportInProgressError("An export is already in progress")
        self._in_flight = True
        try:
            return await self._export(surface, path)
        finally:
            self._in_flight = False

    async def _export(self, surface: RenderedSurface, path: Path) -> Path:
        try:
            rasterizer = self.rasterizer_factory()
            count = rasterizer.page_count(surface)
            if count > self.max_pages:
                raise ExportFailure(
                    f"Document needs {count} pages, more than the limit of {self.max_pages}"
                )

            canvas = Canvas(str(path), pagesize=A4)
            page_width, page_height = A4
            written = 0
            for index in range(count):
                image = rasterizer.render_page(surface, index, self.scale)
                canvas.drawImage(
                    ImageReader(self._encode(image)),
                    0,
                    0,
                    width=page_width,
                    height=page_height,
                )
                canvas.showPage()
                written += 1
                logger.debug("Rasterized page %d/%d", index + 1, count)
                # Let the event loop run between pages
                await asyncio.sleep(0)

            if not written:
                raise ExportFailure("Rasterization produced no pages")

            path.parent.mkdir(parents=True, exist_ok=True)
            canvas.save()
        except ExportFailure:
            raise
        except Exception as e:
            raise ExportFailure(f"PDF export failed: {e}") from e

        logger.info("Wrote %d page(s) to %s", written, path)
        return path

    def _encode(self, image: Image.Image) -> io.BytesIO:
        """Encode a page image as JPEG."""
        buffer = io.BytesIO()
        image.convert("RGB").save(
            buffer, format="JPEG", quality=max(1, min(100, round(self.jpeg_quality * 100)))
        )
        buffer.seek(0)
        return buffer
