"""mdpress - extended markdown to print-ready A4 documents."""

__version__ = "0.1.0"
