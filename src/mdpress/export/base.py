"""Exporter interfaces and errors."""

from abc import ABC, abstractmethod
from typing import Iterator

from PIL import Image

from mdpress.render.surface import A4_HEIGHT_PT, RenderedSurface


class ExportFailure(Exception):
    """Rasterization threw or produced no output."""

    pass


class ExportInProgressError(Exception):
    """An export is already running; a second one was not started."""

    pass


class HostUnavailable(Exception):
    """The host refused to open the print document."""

    pass


class PageRasterizer(ABC):
    """Abstract base class for page rasterizers.

    A rasterizer slices a RenderedSurface into fixed-size pages and
    draws each one as an image. Exporters only talk to this interface.
    """

    page_height: float = A4_HEIGHT_PT

    @abstractmethod
    def render_page(self, surface: RenderedSurface, index: int, scale: float) -> Image.Image:
        """Draw one page of the surface.

        Args:
            surface: The laid-out surface
            index: Zero-based page number
            scale: Device pixels per CSS pixel (1.0 = 96 dpi)

        Returns:
            RGB image of the page
        """
        ...

    def page_count(self, surface: RenderedSurface) -> int:
        """Number of pages the surface is sliced into."""
        return surface.page_count(self.page_height)

    def pages(self, surface: RenderedSurface, scale: float) -> Iterator[Image.Image]:
        """Draw every page in order."""
        for index in range(self.page_count(surface)):
            yield self.render_page(surface, index, scale)
