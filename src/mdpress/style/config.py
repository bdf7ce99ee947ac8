"""User-adjustable presentation parameters.

StyleConfig is an immutable value object. Invalid field values never
raise: each field falls back to a documented default and the fallback
is logged, so a half-filled settings file still renders.
"""

import json
import math
import re
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from mdpress.log import get_logger

logger = get_logger(__name__)

MIN_MARGIN_MM = 0
MAX_MARGIN_MM = 50
MIN_FONT_SIZE = 8
MAX_FONT_SIZE = 48
FALLBACK_FONT_SIZE = 11
MIN_LINE_HEIGHT = 1.0
MAX_LINE_HEIGHT = 3.0

HEX_COLOR_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+))")
_TRUE_WORDS = {"true", "1", "yes", "on"}
_FALSE_WORDS = {"false", "0", "no", "off"}


class FontFamily(str, Enum):
    """Supported font families."""

    SANS_SERIF = "sans-serif"
    SERIF = "serif"
    MONO = "mono"


def parse_leading_int(value: Any) -> Optional[int]:
    """Read an integer the lenient way a form field does ("12mm" -> 12)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def parse_leading_float(value: Any) -> Optional[float]:
    """Read a float the lenient way a form field does ("1.4x" -> 1.4)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    else:
        match = _LEADING_FLOAT.match(str(value))
        if not match:
            return None
        number = float(match.group(1))
    # Neither inf nor nan is a usable value
    return number if math.isfinite(number) else None


def _clamp(value, low, high):
    return max(low, min(high, value))


def _field_default(cls: type[BaseModel], info: ValidationInfo) -> Any:
    return cls.model_fields[info.field_name].default


class Margins(BaseModel):
    """Content insets in millimetres."""

    model_config = ConfigDict(frozen=True)

    top: int = 20
    right: int = 20
    bottom: int = 20
    left: int = 20

    @field_validator("top", "right", "bottom", "left", mode="before")
    @classmethod
    def _coerce_margin(cls, value: Any, info: ValidationInfo) -> int:
        number = parse_leading_int(value)
        if number is None:
            logger.warning("Invalid margin %s=%r, using 0", info.field_name, value)
            return 0
        return _clamp(number, MIN_MARGIN_MM, MAX_MARGIN_MM)


class FontSizes(BaseModel):
    """Font sizes in points."""

    model_config = ConfigDict(frozen=True)

    body: int = 11
    h1: int = 24
    h2: int = 14
    h3: int = 12

    @field_validator("body", "h1", "h2", "h3", mode="before")
    @classmethod
    def _coerce_size(cls, value: Any, info: ValidationInfo) -> int:
        number = parse_leading_int(value)
        if number is None or number <= 0:
            logger.warning(
                "Invalid font size %s=%r, using %d", info.field_name, value, FALLBACK_FONT_SIZE
            )
            return FALLBACK_FONT_SIZE
        return _clamp(number, MIN_FONT_SIZE, MAX_FONT_SIZE)


class StyleConfig(BaseModel):
    """Full set of presentation parameters for one render.

    Field names are snake_case; the camelCase names used by the settings
    JSON (``centerH1``, ``fontSize``, ...) are accepted as aliases.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    center_h1: bool = Field(default=True, alias="centerH1")
    center_h2: bool = Field(default=False, alias="centerH2")
    center_h3: bool = Field(default=False, alias="centerH3")
    center_first_paragraph: bool = Field(default=True, alias="centerFirstParagraph")
    margins: Margins = Field(default_factory=Margins)
    font_size: FontSizes = Field(default_factory=FontSizes, alias="fontSize")
    font_family: FontFamily = Field(default=FontFamily.SANS_SERIF, alias="fontFamily")
    heading_color: str = Field(default="#1a1a1a", alias="headingColor")
    accent_color: str = Field(default="#0d9488", alias="accentColor")
    line_height: float = Field(default=1.5, alias="lineHeight")

    @field_validator(
        "center_h1", "center_h2", "center_h3", "center_first_paragraph", mode="before"
    )
    @classmethod
    def _coerce_flag(cls, value: Any, info: ValidationInfo) -> bool:
        if isinstance(value, bool):
            return value
        word = str(value).strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        default = _field_default(cls, info)
        logger.warning("Invalid flag %s=%r, using %s", info.field_name, value, default)
        return default

    @field_validator("margins", "font_size", mode="before")
    @classmethod
    def _coerce_group(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, (dict, BaseModel)):
            return value
        logger.warning("Invalid %s=%r, using defaults", info.field_name, value)
        return {}

    @field_validator("font_family", mode="before")
    @classmethod
    def _coerce_family(cls, value: Any) -> FontFamily:
        try:
            return FontFamily(value)
        except ValueError:
            logger.warning("Unknown font family %r, using sans-serif", value)
            return FontFamily.SANS_SERIF

    @field_validator("heading_color", "accent_color", mode="before")
    @classmethod
    def _coerce_color(cls, value: Any, info: ValidationInfo) -> str:
        if isinstance(value, str) and HEX_COLOR_PATTERN.match(value.strip()):
            return value.strip()
        default = _field_default(cls, info)
        logger.warning("Invalid color %s=%r, using %s", info.field_name, value, default)
        return default

    @field_validator("line_height", mode="before")
    @classmethod
    def _coerce_line_height(cls, value: Any) -> float:
        number = parse_leading_float(value)
        if number is None or number <= 0:
            logger.warning("Invalid line height %r, using 1.5", value)
            return 1.5
        return _clamp(number, MIN_LINE_HEIGHT, MAX_LINE_HEIGHT)

    def updated(self, **changes: Any) -> "StyleConfig":
        """Return a fresh, validated config with some fields replaced."""
        data = self.model_dump()
        data.update({key: value for key, value in changes.items() if value is not None})
        return StyleConfig.model_validate(data)

    @classmethod
    def from_json_file(cls, path: Path) -> "StyleConfig":
        """Load a config from a JSON settings file.

        Raises:
            ValueError: If the file is not a JSON object
        """
        data = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"Style file must contain a JSON object: {path}")
        return cls.model_validate(data)
