"""Central logging configuration for mdpress."""

import logging
from typing import Optional

from rich.logging import RichHandler

_FORMAT = "%(name)s: %(message)s"
_configured = False


def configure_logging(level: str = "WARNING") -> None:
    """Attach a rich handler to the package logger.

    Safe to call more than once; later calls only change the level.
    """
    global _configured
    logger = logging.getLogger("mdpress")
    logger.setLevel(level.upper())
    if _configured:
        return
    handler = RichHandler(show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(handler)
    _configured = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger under the package namespace."""
    return logging.getLogger(name or "mdpress")
