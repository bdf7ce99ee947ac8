"""Unit conversion helpers for page measurements."""

POINTS_PER_INCH = 72
MM_PER_INCH = 25.4
CSS_PX_PER_INCH = 96


def mm_to_pt(value: float) -> float:
    """Convert millimetres to typographic points."""
    return value / MM_PER_INCH * POINTS_PER_INCH


def pt_to_mm(value: float) -> float:
    """Convert typographic points to millimetres."""
    return value / POINTS_PER_INCH * MM_PER_INCH


def px_to_pt(value: float) -> float:
    """Convert CSS pixels (1/96 inch) to points."""
    return value * POINTS_PER_INCH / CSS_PX_PER_INCH


def pt_to_px(value: float, scale: float = 1.0) -> float:
    """Convert points to device pixels at ``scale`` x 96 dpi."""
    return value * CSS_PX_PER_INCH / POINTS_PER_INCH * scale
