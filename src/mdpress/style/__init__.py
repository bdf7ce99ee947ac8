"""Style configuration and resolution into presentation rules."""

from mdpress.style.config import FontFamily, FontSizes, Margins, StyleConfig
from mdpress.style.resolver import (
    Alignment,
    Border,
    PageRule,
    PresentationRule,
    ResolvedStyle,
    resolve_style,
)

__all__ = [
    "FontFamily",
    "FontSizes",
    "Margins",
    "StyleConfig",
    "Alignment",
    "Border",
    "PageRule",
    "PresentationRule",
    "ResolvedStyle",
    "resolve_style",
]
