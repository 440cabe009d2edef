#!/usr/bin/env python3
# emoji_mosaic/rendering/text_mode.py
"""
Terminal text backend.
Lays placements out row by row as prompt_toolkit style runs.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from emoji_mosaic.rendering.renderer import RenderBackend
from emoji_mosaic.tiling import Placement

StyleRun = Tuple[str, str]                # (style, text)
LineFrag = List[StyleRun]                 # one terminal row as runs
FrameFrag = List[LineFrag]                # full terminal frame as rows

__all__ = ["TextBackend", "frame_to_text", "StyleRun", "LineFrag", "FrameFrag"]

# Emoji occupy two terminal columns
BLANK = "  "
BLANK_STYLE = "class:mosaic.blank"
PLAIN_STYLE = "class:mosaic"


class TextBackend(RenderBackend):
    name = "text"

    @staticmethod
    def _rgb_to_style(hex6: str) -> str:
        return f"bg:#{hex6}"

    def render(
        self,
        placements: Iterable[Placement],
        columns: int,
        rows: int,
        resolution: int,
        use_color: bool,
    ) -> FrameFrag:
        if columns < 1 or rows < 1:
            return []

        cells: Dict[Tuple[int, int], Placement] = {}
        for p in placements:
            cells[(p.cell.row, p.cell.column)] = p

        frame: FrameFrag = []
        for y in range(rows):
            line: LineFrag = []
            run_style = None
            run_text: List[str] = []
            for x in range(columns):
                p = cells.get((y, x))
                if p is None:
                    style, text = BLANK_STYLE, BLANK
                else:
                    style = self._rgb_to_style(p.color.hex) if use_color else PLAIN_STYLE
                    text = p.glyph
                if style != run_style and run_text:
                    line.append((run_style, "".join(run_text)))
                    run_text = []
                run_style = style
                run_text.append(text)
            if run_text:
                line.append((run_style, "".join(run_text)))
            frame.append(line)
        return frame


def frame_to_text(frame: FrameFrag) -> str:
    """Drop styles and join rows with newlines."""
    return "\n".join("".join(text for _style, text in line) for line in frame)
