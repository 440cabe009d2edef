#!/usr/bin/env python3
# emoji_mosaic/errors.py
"""
Error types raised while loading palettes and images.

All of them derive from MosaicError so callers can catch one type. Each also
derives from the closest builtin (FileNotFoundError / ValueError) so generic
handlers keep working.
"""

from __future__ import annotations
from typing import Optional

__all__ = [
    "MosaicError",
    "MissingSourceError",
    "MalformedEntryError",
    "InvalidColorError",
    "InvalidInputImageError",
    "EmptyPaletteError",
]


class MosaicError(Exception):
    """Base class. `text` holds the offending input, when there is one."""

    def __init__(self, message: str, text: Optional[str] = None,
                 source: Optional[str] = None, line_no: Optional[int] = None):
        super().__init__(message)
        self.text = text
        self.source = source
        self.line_no = line_no


def _where(source: Optional[str], line_no: Optional[int]) -> str:
    if source and line_no:
        return f"{source}:{line_no}: "
    if source:
        return f"{source}: "
    return ""


class MissingSourceError(MosaicError, FileNotFoundError):
    def __init__(self, location: str, reason: str = ""):
        msg = f"cannot open resource {location!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg, text=location, source=location)


class MalformedEntryError(MosaicError, ValueError):
    def __init__(self, line: str, source: Optional[str] = None, line_no: Optional[int] = None):
        super().__init__(
            f"{_where(source, line_no)}malformed color map entry {line!r} (expected RRGGBB:glyph)",
            text=line, source=source, line_no=line_no,
        )


class InvalidColorError(MosaicError, ValueError):
    def __init__(self, color: str, source: Optional[str] = None, line_no: Optional[int] = None):
        super().__init__(
            f"{_where(source, line_no)}invalid color {color!r} (expected 6 hex digits)",
            text=color, source=source, line_no=line_no,
        )


class InvalidInputImageError(MosaicError, ValueError):
    def __init__(self, name: str, reason: str = ""):
        msg = f"cannot decode image {name!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg, text=name, source=name)


class EmptyPaletteError(MosaicError, ValueError):
    def __init__(self, source: Optional[str] = None):
        super().__init__(f"{_where(source, None)}color map has no entries", source=source)
