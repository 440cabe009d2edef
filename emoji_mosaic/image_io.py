#!/usr/bin/env python3
# emoji_mosaic/image_io.py
"""
Source image decoding and pre-processing.

decode_image() turns raw bytes into a fully loaded Pillow image.
prepare_image() normalizes mode, bounds the size and applies optional
contrast before the image is handed to the tiling driver.
"""

from __future__ import annotations

import io
from typing import Optional

from PIL import Image, ImageEnhance, ImageOps, UnidentifiedImageError

from emoji_mosaic.errors import InvalidInputImageError
from emoji_mosaic.resources import ResourceCache, read_resource

__all__ = ["decode_image", "load_image", "prepare_image"]


def decode_image(data: bytes, name: str = "<bytes>") -> Image.Image:
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise InvalidInputImageError(name, str(e)) from e
    return img


def load_image(location: str, cache: Optional[ResourceCache] = None) -> Image.Image:
    return decode_image(read_resource(location, cache), location)


def prepare_image(
    img: Image.Image,
    max_size: Optional[int] = None,
    contrast: float = 1.0,
) -> Image.Image:
    """
    Return an RGB/RGBA copy ready for sampling, EXIF orientation applied.

    max_size bounds the longest edge (aspect preserved, never upscaled).
    """
    img = ImageOps.exif_transpose(img)
    keep_alpha = img.mode in ("RGBA", "LA", "PA") or "transparency" in img.info
    mode = "RGBA" if keep_alpha else "RGB"
    out = img.convert(mode) if img.mode != mode else img.copy()

    if max_size and max(out.size) > max_size:
        scale = max_size / float(max(out.size))
        w = max(1, int(round(out.width * scale)))
        h = max(1, int(round(out.height * scale)))
        out = out.resize((w, h), Image.LANCZOS)

    if contrast != 1.0:
        if keep_alpha:
            alpha = out.getchannel("A")
            out = ImageEnhance.Contrast(out.convert("RGB")).enhance(contrast)
            out.putalpha(alpha)
        else:
            out = ImageEnhance.Contrast(out).enhance(contrast)

    return out
