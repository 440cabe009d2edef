#!/usr/bin/env python3
# emoji_mosaic/color.py
"""
Color value type used as palette and match-cache key.

Channels are floats in [0, 1]. Source data is 8-bit, so every Color that ends
up as a dict key is built through the same v / 255 rule (from_rgb8/from_int);
equal 8-bit triples therefore always hash equal.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

__all__ = ["Color", "distance"]


@dataclass(frozen=True)
class Color:
    r: float
    g: float
    b: float

    @classmethod
    def from_rgb8(cls, r: int, g: int, b: int) -> "Color":
        return cls(int(r) / 255.0, int(g) / 255.0, int(b) / 255.0)

    @classmethod
    def from_int(cls, rgb: int) -> "Color":
        """Build from a packed 0xRRGGBB integer."""
        if not 0 <= rgb <= 0xFFFFFF:
            raise ValueError(f"rgb value out of range: {rgb:#x}")
        return cls.from_rgb8((rgb >> 16) & 0xFF, (rgb >> 8) & 0xFF, rgb & 0xFF)

    @property
    def rgb8(self) -> Tuple[int, int, int]:
        # round() not int(): v / 255 * 255 can land just under v
        return (
            int(round(self.r * 255)),
            int(round(self.g * 255)),
            int(round(self.b * 255)),
        )

    def to_int(self) -> int:
        r, g, b = self.rgb8
        return (r << 16) | (g << 8) | b

    @property
    def hex(self) -> str:
        return f"{self.to_int():06x}"

    def distance(self, other: "Color") -> float:
        return distance(self, other)


def distance(a: Color, b: Color) -> float:
    """Euclidean distance in normalized RGB. No weighting."""
    return math.sqrt((b.r - a.r) ** 2 + (b.g - a.g) ** 2 + (b.b - a.b) ** 2)
