#!/usr/bin/env python3
"""
mdpress - extended markdown to print-ready A4 documents

Simple usage:
    python press.py export resume.md            # Outputs document.pdf
    python press.py export resume.md -o cv.pdf  # Choose the output file
    python press.py print resume.md             # Browser print dialog
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from mdpress.cli import app

if __name__ == "__main__":
    app()
