#!/usr/bin/env python3
# emoji_mosaic/version.py
"""
Version and build metadata for Emoji Mosaic.
"""

__version__ = "1.2.0"
__build__ = "2026-10-19"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"Emoji Mosaic v{__version__} (build {__build__})"
