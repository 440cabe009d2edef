#!/usr/bin/env python3
# emoji_mosaic/styles.py
"""
Style definitions for terminal mosaic output.
Provides light, dark, and auto themes for prompt_toolkit.
"""

import os

from prompt_toolkit.styles import Style

from emoji_mosaic.config import Config

_BASE_DARK = {
    "mosaic": "bg:#000000",
    "mosaic.blank": "bg:#000000",
    "summary": "fg:#888888 italic",
}
_BASE_LIGHT = {
    "mosaic": "bg:#ffffff",
    "mosaic.blank": "bg:#ffffff",
    "summary": "fg:#555555 italic",
}


def make_style(cfg: Config) -> Style:
    theme = cfg["output"].get("theme", "auto")

    if theme == "light":
        return Style.from_dict(_BASE_LIGHT)
    if theme == "dark":
        return Style.from_dict(_BASE_DARK)

    # Auto-detect via environment
    if os.getenv("TERM_THEME", "").lower() == "light":
        return Style.from_dict(_BASE_LIGHT)
    return Style.from_dict(_BASE_DARK)
