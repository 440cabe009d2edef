#!/usr/bin/env python3
# emoji_mosaic/sampling.py
"""
Region sampling: one representative Color per image region.

- sample_pixel: the stored pixel at a point (tiling default).
- sample_average: channel mean over a box.
- average_color: mean of a small Lanczos thumbnail, for glyph swatches.

A miss (outside the grid, or fully transparent) returns None; callers skip.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from PIL import Image

from emoji_mosaic.color import Color

__all__ = [
    "PixelGrid",
    "to_pixel_grid",
    "sample_pixel",
    "sample_average",
    "average_color",
]

PixelGrid = np.ndarray                      # (H, W, 3|4) uint8
Box = Tuple[int, int, int, int]             # left, top, right, bottom


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or (img.mode == "P" and "transparency" in img.info)


def to_pixel_grid(img: Image.Image) -> PixelGrid:
    """Decode a Pillow image into an (H, W, C) uint8 array, RGBA if it has transparency."""
    mode = "RGBA" if _has_alpha(img) else "RGB"
    if img.mode != mode:
        img = img.convert(mode)
    return np.asarray(img, dtype=np.uint8)


def sample_pixel(grid: PixelGrid, x: int, y: int) -> Optional[Color]:
    h, w = grid.shape[:2]
    if not (0 <= x < w and 0 <= y < h):
        return None
    px = grid[y, x]
    if grid.shape[2] == 4 and px[3] == 0:
        return None
    r, g, b = px[:3].tolist()
    return Color.from_rgb8(r, g, b)


def sample_average(grid: PixelGrid, box: Box) -> Optional[Color]:
    h, w = grid.shape[:2]
    left, top, right, bottom = box
    left, top = max(0, left), max(0, top)
    right, bottom = min(w, right), min(h, bottom)
    if right <= left or bottom <= top:
        return None

    region = grid[top:bottom, left:right].reshape(-1, grid.shape[2])
    if grid.shape[2] == 4:
        region = region[region[:, 3] > 0]
        if region.size == 0:
            return None
    r, g, b = np.rint(region[:, :3].mean(axis=0)).astype(int).tolist()
    return Color.from_rgb8(r, g, b)


def average_color(img: Image.Image, size: Tuple[int, int] = (16, 16)) -> Optional[Color]:
    thumb = img.convert("RGBA").resize(size, Image.LANCZOS)
    grid = np.asarray(thumb, dtype=np.uint8)
    return sample_average(grid, (0, 0, size[0], size[1]))
