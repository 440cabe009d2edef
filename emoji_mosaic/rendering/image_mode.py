#!/usr/bin/env python3
# emoji_mosaic/rendering/image_mode.py
"""
Image backend.
Draws each glyph centred in its cell on a Pillow canvas the size of the grid.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from emoji_mosaic.rendering.renderer import RenderBackend
from emoji_mosaic.tiling import Placement

log = logging.getLogger(__name__)

__all__ = ["ImageBackend", "load_font"]


def load_font(font_path: Optional[str], size: int):
    """TrueType font at size, or Pillow's default when unavailable."""
    if font_path:
        try:
            return ImageFont.truetype(font_path, size)
        except OSError as e:
            log.warning("Cannot use font %s at size %d (%s); using default font", font_path, size, e)
    return ImageFont.load_default(size)


def _parse_background(background: Optional[str]) -> Tuple[int, int, int, int]:
    if not background:
        return (0, 0, 0, 0)
    s = background.lstrip("#")
    return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16), 255)


class ImageBackend(RenderBackend):
    name = "image"

    def __init__(
        self,
        font_path: Optional[str] = None,
        font_scale: float = 0.9,
        background: Optional[str] = None,
    ):
        self.font_path = font_path
        self.font_scale = font_scale
        self.background = background

    def configure(self, font_path: Optional[str], font_scale: float, background: Optional[str]) -> None:
        self.font_path = font_path
        self.font_scale = font_scale
        self.background = background

    def render(
        self,
        placements: Iterable[Placement],
        columns: int,
        rows: int,
        resolution: int,
        use_color: bool,
    ) -> Image.Image:
        canvas = Image.new(
            "RGBA",
            (max(1, columns * resolution), max(1, rows * resolution)),
            _parse_background(self.background),
        )
        draw = ImageDraw.Draw(canvas)
        font = load_font(self.font_path, max(1, int(resolution * self.font_scale)))
        extra = {"embedded_color": True} if isinstance(font, ImageFont.FreeTypeFont) else {}

        for p in placements:
            left, top, _right, _bottom = p.cell.box
            bbox = draw.textbbox((0, 0), p.glyph, font=font)
            tw = bbox[2] - bbox[0]
            th = bbox[3] - bbox[1]
            tx = left + (resolution - tw) / 2 - bbox[0]
            ty = top + (resolution - th) / 2 - bbox[1]
            draw.text((tx, ty), p.glyph, font=font, fill=(0, 0, 0, 255), **extra)
        return canvas
