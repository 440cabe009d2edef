#!/usr/bin/env python3
# emoji_mosaic/cli.py
"""
Entry point for Emoji Mosaic.
Loads configuration, builds the palette and renders an image as a mosaic.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from prompt_toolkit import print_formatted_text
from prompt_toolkit.formatted_text import FormattedText

from emoji_mosaic.colormap import format_colormap, load_colormap
from emoji_mosaic.config import Config
from emoji_mosaic.errors import MosaicError
from emoji_mosaic.image_io import load_image, prepare_image
from emoji_mosaic.logging_conf import setup_logging
from emoji_mosaic.rendering.renderer import Renderer
from emoji_mosaic.resources import ResourceCache
from emoji_mosaic.styles import make_style
from emoji_mosaic.version import version_info

log = logging.getLogger("emoji_mosaic")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="emoji-mosaic",
        description="Render an image as a mosaic of emoji.",
    )
    p.add_argument("image", nargs="?", help="image path or http(s) URL")
    p.add_argument("-c", "--colormap", help="color map path or URL (RRGGBB:glyph per line)")
    p.add_argument("-r", "--resolution", type=int, help="tile edge in source pixels")
    p.add_argument("-s", "--sampling", choices=("pixel", "average"), help="per-tile color sampling")
    p.add_argument("-m", "--mode", choices=("text", "image"), help="output backend")
    p.add_argument("-o", "--output", help="PNG path for image mode")
    p.add_argument("--font", help="TrueType emoji font for image mode")
    p.add_argument("--max-size", type=int, help="shrink source so its longest edge fits")
    p.add_argument("--no-color", action="store_true", help="plain text output")
    p.add_argument("--config", help="config file (default: per-user JSON)")
    p.add_argument("--dump-palette", action="store_true", help="print the parsed color map and exit")
    p.add_argument("-v", "--verbose", action="count", default=0)
    p.add_argument("--version", action="version", version=version_info())
    return p


def _apply_args(cfg: Config, args: argparse.Namespace) -> None:
    partial = {"mosaic": {}, "image": {}, "output": {}}
    if args.colormap:
        partial["mosaic"]["colormap"] = args.colormap
    if args.resolution is not None:
        partial["mosaic"]["resolution"] = args.resolution
    if args.sampling:
        partial["mosaic"]["sampling"] = args.sampling
    if args.max_size is not None:
        partial["image"]["max_size"] = args.max_size
    if args.mode:
        partial["output"]["mode"] = args.mode
    if args.output:
        partial["output"]["file"] = args.output
    if args.font:
        partial["output"]["font_path"] = args.font
    if args.no_color:
        partial["output"]["color"] = False
    cfg.update(partial)


def run(args: argparse.Namespace) -> int:
    cfg = Config.load(args.config)
    _apply_args(cfg, args)
    verbosity = {0: None, 1: "INFO"}.get(args.verbose, "DEBUG")
    setup_logging(cfg, verbosity)

    net = cfg["network"]
    resources = ResourceCache(
        Path(cfg.cache_dir),
        net["user_agent"],
        connect_timeout=net["connect_timeout_s"],
        read_timeout=net["read_timeout_s"],
        retries=net["retries"],
    )
    try:
        palette = load_colormap(cfg["mosaic"]["colormap"], resources)
        if args.dump_palette:
            sys.stdout.write(format_colormap(palette))
            return 0
        if not args.image:
            log.error("No input image given")
            return 2

        img = prepare_image(
            load_image(args.image, resources),
            max_size=cfg["image"]["max_size"],
            contrast=cfg["image"]["contrast"],
        )
        out = cfg["output"]
        renderer = Renderer()
        renderer.backend("image").configure(out["font_path"], out["font_scale"], out["background"])
        result = renderer.render(
            img,
            palette,
            mode=out["mode"],
            resolution=cfg.resolution,
            sampling=cfg["mosaic"]["sampling"],
            use_color=out["color"],
        )

        if out["mode"] == "image":
            try:
                result.save(out["file"], "PNG")
            except OSError as e:
                log.error("Cannot write %s: %s", out["file"], e)
                return 1
            log.info("Wrote %dx%d mosaic to %s", result.width, result.height, out["file"])
        else:
            style = make_style(cfg)
            for line in result:
                print_formatted_text(FormattedText(line), style=style)
    except MosaicError as e:
        log.error("%s", e)
        return 1
    finally:
        resources.prune(cfg["cache"]["max_bytes"], cfg["cache"]["prune_watermark"])
        resources.close()
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    raise SystemExit(run(args))


if __name__ == "__main__":
    main()
