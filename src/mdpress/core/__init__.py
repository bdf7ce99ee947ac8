"""Core pipeline orchestration for mdpress."""

from mdpress.core.converter import (
    ConversionError,
    DocumentConverter,
    SourceStats,
    load_source,
    load_style,
    source_stats,
)

__all__ = [
    "ConversionError",
    "DocumentConverter",
    "SourceStats",
    "load_source",
    "load_style",
    "source_stats",
]
