#!/usr/bin/env python3
"""
main.py — Quick-start entry point.

    python main.py target.jpg path/to/reference/folder

Or use the full CLI:

    python -m photo_mosaic.cli --help
"""

from photo_mosaic.cli import app

if __name__ == "__main__":
    app()
