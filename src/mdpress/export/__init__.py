"""Exporters that turn a rendered surface into an output document."""

from mdpress.export.base import (
    ExportFailure,
    ExportInProgressError,
    HostUnavailable,
    PageRasterizer,
)
from mdpress.export.rasterizer import PillowRasterizer
from mdpress.export.pdf_exporter import RasterPdfExporter
from mdpress.export.print_exporter import PrintExporter

__all__ = [
    "ExportFailure",
    "ExportInProgressError",
    "HostUnavailable",
    "PageRasterizer",
    "PillowRasterizer",
    "RasterPdfExporter",
    "PrintExporter",
]
