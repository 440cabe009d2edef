#!/usr/bin/env python3
# emoji_mosaic/rendering/renderer.py
"""
Output dispatcher.

- Common API: Renderer.render(img, palette, mode, resolution, sampling, use_color)
- Backends may register via Renderer.register(mode, backend)
- A backend receives the lazy Placement stream plus the grid size and turns
  it into an artifact: styled text lines ("text") or a Pillow image ("image").

The text backend is always registered so unknown modes have a fallback.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from PIL import Image

from emoji_mosaic.colormap import Palette
from emoji_mosaic.tiling import DEFAULT_RESOLUTION, Placement, grid_dimensions, render as render_placements

__all__ = [
    "Renderer",
    "RenderBackend",
]


class RenderBackend:
    """Interface for all output backends."""
    name: str = "base"

    def render(
        self,
        placements: Iterable[Placement],
        columns: int,
        rows: int,
        resolution: int,
        use_color: bool,
    ) -> Any:
        raise NotImplementedError


@dataclass
class Renderer:
    """
    Output strategy holder.
    Use register() to add new modes.
    """
    default_mode: str = "text"
    _backends: Dict[str, RenderBackend] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self):
        from emoji_mosaic.rendering.image_mode import ImageBackend
        from emoji_mosaic.rendering.text_mode import TextBackend

        self.register("text", TextBackend())
        self.register("image", ImageBackend())

    def register(self, mode: str, backend: RenderBackend) -> None:
        self._backends[mode] = backend

    def backend(self, mode: Optional[str]) -> RenderBackend:
        b = self._backends.get(mode or self.default_mode)
        if b is None:
            # Fallback to text if unknown mode requested
            b = self._backends["text"]
        return b

    @property
    def modes(self):
        return tuple(self._backends)

    def render(
        self,
        img: Image.Image,
        palette: Palette,
        mode: Optional[str] = None,
        resolution: int = DEFAULT_RESOLUTION,
        sampling: str = "pixel",
        use_color: bool = True,
    ) -> Any:
        columns, rows = grid_dimensions(img.width, img.height, resolution)
        placements = render_placements(img, palette, resolution, sampling)
        return self.backend(mode).render(placements, columns, rows, resolution, use_color)
