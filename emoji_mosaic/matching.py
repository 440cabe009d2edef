#!/usr/bin/env python3
# emoji_mosaic/matching.py
"""
Nearest palette entry search.

Linear scan over the palette in its canonical (ascending RGB) order, keeping
the first strictly smaller distance, so equidistant entries resolve to the
lowest key. Palettes are tens to a few hundred entries; no spatial index.
"""

from __future__ import annotations

from typing import Dict, Tuple

from emoji_mosaic.color import Color, distance
from emoji_mosaic.colormap import Palette

__all__ = ["nearest", "nearest_entry", "MatchCache"]


def nearest_entry(color: Color, palette: Palette) -> Tuple[Color, str, float]:
    """Return (palette color, glyph, distance) of the closest entry."""
    first = palette.entries()[0]
    best = (first[0], first[1], distance(first[0], color))
    for key, glyph in palette.entries()[1:]:
        if best[2] == 0.0:
            break
        d = distance(key, color)
        if d < best[2]:
            best = (key, glyph, d)
    return best


def nearest(color: Color, palette: Palette) -> str:
    return nearest_entry(color, palette)[1]


class MatchCache:
    """
    Sampled color -> glyph memo for one rendering pass.
    Not thread-safe; give every pass its own instance.
    """

    def __init__(self):
        self._table: Dict[Color, str] = {}
        self.hits = 0
        self.misses = 0

    def resolve(self, color: Color, palette: Palette) -> str:
        glyph = self._table.get(color)
        if glyph is not None:
            self.hits += 1
            return glyph
        self.misses += 1
        glyph = nearest(color, palette)
        self._table[color] = glyph
        return glyph

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, color: Color) -> bool:
        return color in self._table

    def clear(self) -> None:
        self._table.clear()
        self.hits = self.misses = 0
