#!/usr/bin/env python3
# emoji_mosaic/tiling.py
"""
Tiling driver.

Splits an image into resolution x resolution cells and maps each cell to a
glyph. Cells are visited column-major: columns left to right, and within a
column rows top to bottom. Partial cells on the right and bottom edges are
never produced.

render() is a generator. Each call builds its own MatchCache, so two calls on
the same inputs yield the same sequence.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, Tuple

from PIL import Image

from emoji_mosaic.color import Color
from emoji_mosaic.colormap import Palette
from emoji_mosaic.matching import MatchCache
from emoji_mosaic.sampling import sample_average, sample_pixel, to_pixel_grid

log = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_RESOLUTION",
    "SAMPLING_MODES",
    "GridCell",
    "Placement",
    "grid_dimensions",
    "iter_cells",
    "render",
]

DEFAULT_RESOLUTION = 10
SAMPLING_MODES = ("pixel", "average")


@dataclass(frozen=True)
class GridCell:
    column: int
    row: int
    size: int

    @property
    def x(self) -> int:
        return self.column * self.size

    @property
    def y(self) -> int:
        return self.row * self.size

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """(left, top, right, bottom), right/bottom exclusive."""
        return (self.x, self.y, self.x + self.size, self.y + self.size)


@dataclass(frozen=True)
class Placement:
    cell: GridCell
    glyph: str
    color: Color


def _check_resolution(resolution: int) -> int:
    if isinstance(resolution, bool) or not isinstance(resolution, int) or resolution < 1:
        raise ValueError(f"resolution must be a positive integer, got {resolution!r}")
    return resolution


def grid_dimensions(width: int, height: int, resolution: int) -> Tuple[int, int]:
    """Return (columns, rows) of whole cells that fit in width x height."""
    resolution = _check_resolution(resolution)
    return max(0, width) // resolution, max(0, height) // resolution


def iter_cells(width: int, height: int, resolution: int) -> Iterator[GridCell]:
    columns, rows = grid_dimensions(width, height, resolution)
    for column in range(columns):
        for row in range(rows):
            yield GridCell(column, row, resolution)


def render(
    image: Image.Image,
    palette: Palette,
    resolution: int = DEFAULT_RESOLUTION,
    sampling: str = "pixel",
) -> Iterator[Placement]:
    """
    Yield a Placement for every cell whose sample resolves to a color.
    Cells whose sample misses are skipped silently.
    """
    if sampling not in SAMPLING_MODES:
        raise ValueError(f"unknown sampling mode {sampling!r}")
    _check_resolution(resolution)

    grid = to_pixel_grid(image)
    height, width = grid.shape[:2]
    cache = MatchCache()
    total = skipped = 0

    for cell in iter_cells(width, height, resolution):
        total += 1
        if sampling == "pixel":
            color = sample_pixel(grid, cell.x, cell.y)
        else:
            color = sample_average(grid, cell.box)
        if color is None:
            skipped += 1
            continue
        yield Placement(cell, cache.resolve(color, palette), color)

    log.debug(
        "Rendered %dx%d @%d: %d cells, %d skipped, cache %d entries (%d hits / %d misses)",
        width, height, resolution, total, skipped, len(cache), cache.hits, cache.misses,
    )
