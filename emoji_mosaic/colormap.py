#!/usr/bin/env python3
# emoji_mosaic/colormap.py
"""
Color map loader.

A color map is UTF-8 text with one `RRGGBB:glyph` entry per line:

    ff0000:🍎
    00ff00:🥦

Blank lines are skipped. Surrounding whitespace is stripped from both the
color and the glyph; an empty glyph is a malformed entry. Later duplicates of
the same color replace earlier ones. Any error aborts the whole load.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Dict, Iterator, Mapping, Optional, Tuple

from emoji_mosaic.color import Color
from emoji_mosaic.errors import (
    EmptyPaletteError,
    InvalidColorError,
    MalformedEntryError,
)

log = logging.getLogger(__name__)

__all__ = [
    "Palette",
    "parse_colormap",
    "load_colormap",
    "format_colormap",
    "default_colormap_path",
]

_HEX6 = re.compile(r"[0-9A-Fa-f]{6}")


# -------------------------
# Palette
# -------------------------

class Palette(Mapping[Color, str]):
    """
    Read-only Color -> glyph table.
    Iterates in ascending packed-RGB order; nearest-match ties resolve to the
    first entry in that order.
    """

    def __init__(self, entries: Mapping[Color, str], source: Optional[str] = None):
        if not entries:
            raise EmptyPaletteError(source)
        ordered = sorted(entries.items(), key=lambda kv: kv[0].to_int())
        self._entries: Tuple[Tuple[Color, str], ...] = tuple(ordered)
        self._lookup: Dict[Color, str] = dict(ordered)
        self.source = source

    def __getitem__(self, color: Color) -> str:
        return self._lookup[color]

    def __iter__(self) -> Iterator[Color]:
        return (c for c, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def entries(self) -> Tuple[Tuple[Color, str], ...]:
        """(color, glyph) pairs in canonical order."""
        return self._entries

    def __repr__(self) -> str:
        return f"Palette({len(self)} entries, source={self.source!r})"


# -------------------------
# Parsing
# -------------------------

def _parse_color(text: str, source: str, line_no: int) -> Color:
    if not _HEX6.fullmatch(text):
        raise InvalidColorError(text, source, line_no)
    return Color.from_int(int(text, 16))


def parse_colormap(text: str, source: str = "<string>") -> Palette:
    """Parse color map text into a Palette."""
    table: Dict[Color, str] = {}
    for line_no, raw in enumerate(text.splitlines(), start=1):
        if not raw.strip():
            continue
        parts = raw.split(":")
        if len(parts) != 2:
            raise MalformedEntryError(raw, source, line_no)
        color_text, glyph = parts[0].strip(), parts[1].strip()
        color = _parse_color(color_text, source, line_no)
        if not glyph:
            raise MalformedEntryError(raw, source, line_no)
        if color in table and table[color] != glyph:
            log.debug("%s:%d: %s redefined %r -> %r", source, line_no, color.hex, table[color], glyph)
        table[color] = glyph
    return Palette(table, source)


def load_colormap(location: Optional[str] = None, cache=None) -> Palette:
    """
    Load a color map from a local path or http(s) URL.
    None loads the bundled map.
    """
    from emoji_mosaic.resources import read_resource

    location = location or default_colormap_path()
    data = read_resource(location, cache)
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        bad = data[e.start:e.end].hex()
        raise MalformedEntryError(f"<undecodable bytes 0x{bad}>", location) from e
    palette = parse_colormap(text, location)
    log.info("Loaded %d palette entries from %s", len(palette), location)
    return palette


def format_colormap(palette: Palette) -> str:
    return "\n".join(f"{c.hex}:{g}" for c, g in palette.entries()) + "\n"


def default_colormap_path() -> str:
    return os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "colormap_simple.txt")
