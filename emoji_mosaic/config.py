#!/usr/bin/env python3
# emoji_mosaic/config.py
"""
Config loader/saver and defaults for Emoji Mosaic.

Goals:
- Single JSON file per user.
- Safe atomic writes.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks.
- No external deps.

Usage:
    from emoji_mosaic.config import Config, DEFAULT_CONFIG
    cfg = Config.load()                 # ~/.config/emoji_mosaic/emoji_mosaic.json or OS-specific
    resolution = cfg["mosaic"]["resolution"]
    cfg["output"]["mode"] = "image"
    cfg.save()
"""

from __future__ import annotations

import copy
import json
import os
import platform
import shutil
import tempfile
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_CONFIG: Dict[str, Any] = {
    "mosaic": {
        "resolution": 10,                 # tile edge in source pixels
        "colormap": None,                 # path or URL; None = bundled map
        "sampling": "pixel",              # pixel | average
    },
    "image": {
        "max_size": None,                 # longest edge in px; None = keep
        "contrast": 1.0,
    },
    "output": {
        "mode": "text",                   # text | image
        "color": True,                    # text mode: paint cell background
        "file": "out.png",                # image mode target
        "font_path": None,                # TrueType/OpenType emoji font
        "font_scale": 0.9,                # glyph size relative to tile
        "background": None,               # "#rrggbb" or None for transparent
        "theme": "auto",                  # auto | light | dark
    },
    "network": {
        "user_agent": "emoji-mosaic/1.2 (+https://example.invalid)",
        "connect_timeout_s": 5.0,
        "read_timeout_s": 15.0,
        "retries": 3,
    },
    "cache": {
        "dir": None,                      # auto if None: OS cache dir
        "max_bytes": 64 * 1024 * 1024,    # 64 MiB
        "prune_watermark": 0.85,          # prune down to 85% when exceeding
    },
    "logging": {
        "level": "WARNING",
        "http_debug": False,
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "EmojiMosaic")
    # macOS: ~/Library/Application Support/EmojiMosaic
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "EmojiMosaic")
    # Linux and others: ~/.config/emoji_mosaic
    return os.path.join(os.path.expanduser("~/.config"), "emoji_mosaic")

def _os_cache_home() -> str:
    """Return per-OS cache base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("LOCALAPPDATA") or os.path.expanduser("~\\AppData\\Local")
        return os.path.join(base, "EmojiMosaic", "Cache")
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Caches"), "EmojiMosaic")
    return os.path.join(os.path.expanduser("~/.cache"), "emoji_mosaic")

def _default_config_path() -> str:
    """Resolve default config path, honoring EMOJI_MOSAIC_CONFIG env override."""
    env = os.environ.get("EMOJI_MOSAIC_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "emoji_mosaic.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _atomic_write_json(path: str, data: Dict[str, Any]) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fd, tmp = tempfile.mkstemp(prefix=".tmp_cfg_", dir=os.path.dirname(path) or ".")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(tmp, path)
    except Exception:
        try:
            os.remove(tmp)
        except OSError:
            pass
        raise

def _coerce_num(v: Any, default: float, minmax: Optional[Tuple[float, float]] = None) -> float:
    try:
        x = float(v)
    except (TypeError, ValueError):
        return float(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    if isinstance(v, bool):
        return int(default)
    try:
        x = int(v)
    except (TypeError, ValueError):
        return int(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

def _coerce_hex(v: Any) -> Optional[str]:
    if not isinstance(v, str):
        return None
    s = v.strip().lstrip("#")
    if len(s) != 6:
        return None
    try:
        int(s, 16)
    except ValueError:
        return None
    return "#" + s.lower()

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    c = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), copy.deepcopy(cfg or {}))

    # mosaic
    m = c["mosaic"]
    m["resolution"] = _coerce_int(m.get("resolution"), DEFAULT_CONFIG["mosaic"]["resolution"], (1, 512))
    cm = m.get("colormap")
    m["colormap"] = str(cm) if cm else None
    if m.get("sampling") not in ("pixel", "average"):
        m["sampling"] = DEFAULT_CONFIG["mosaic"]["sampling"]

    # image
    im = c["image"]
    ms = im.get("max_size")
    im["max_size"] = _coerce_int(ms, 1024, (16, 16384)) if ms else None
    im["contrast"] = _coerce_num(im.get("contrast"), 1.0, (0.1, 3.0))

    # output
    o = c["output"]
    if o.get("mode") not in ("text", "image"):
        o["mode"] = DEFAULT_CONFIG["output"]["mode"]
    o["color"] = _coerce_bool(o.get("color"), DEFAULT_CONFIG["output"]["color"])
    o["file"] = str(o.get("file") or DEFAULT_CONFIG["output"]["file"])
    fp = o.get("font_path")
    o["font_path"] = str(fp) if fp else None
    o["font_scale"] = _coerce_num(o.get("font_scale"), DEFAULT_CONFIG["output"]["font_scale"], (0.1, 4.0))
    o["background"] = _coerce_hex(o.get("background"))
    if o.get("theme") not in ("auto", "light", "dark"):
        o["theme"] = DEFAULT_CONFIG["output"]["theme"]

    # network
    n = c["network"]
    n["user_agent"] = str(n.get("user_agent") or DEFAULT_CONFIG["network"]["user_agent"])
    n["connect_timeout_s"] = _coerce_num(n.get("connect_timeout_s"), 5.0, (0.2, 60.0))
    n["read_timeout_s"]    = _coerce_num(n.get("read_timeout_s"), 15.0, (0.5, 120.0))
    n["retries"]           = _coerce_int(n.get("retries"), 3, (0, 10))

    # cache
    cc = c["cache"]
    cc["dir"] = cc.get("dir") or os.path.join(_os_cache_home(), "resources")
    cc["max_bytes"] = max(1024 * 1024, _coerce_int(cc.get("max_bytes"), DEFAULT_CONFIG["cache"]["max_bytes"]))
    pw = _coerce_num(cc.get("prune_watermark"), DEFAULT_CONFIG["cache"]["prune_watermark"])
    cc["prune_watermark"] = min(0.99, max(0.50, pw))

    # logging
    lg = c["logging"]
    level = str(lg.get("level") or "").upper()
    lg["level"] = level if level in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET") \
        else DEFAULT_CONFIG["logging"]["level"]
    lg["http_debug"] = _coerce_bool(lg.get("http_debug"), DEFAULT_CONFIG["logging"]["http_debug"])
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/save/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate({}))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self.data[k] = v

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None, create_if_missing: bool = False) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            cfg = _validate(DEFAULT_CONFIG)
            if create_if_missing:
                _atomic_write_json(cfg_path, cfg)
            return cls(cfg, cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
            if not isinstance(user_cfg, dict):
                raise ValueError("config root must be an object")
        except (OSError, ValueError):
            # Corrupt file. Backup and regenerate.
            backup = cfg_path + ".corrupt.bak"
            try:
                shutil.copyfile(cfg_path, backup)
            except OSError:
                pass
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path)

    def save(self) -> None:
        """Persist to JSON atomically."""
        full = _validate(self.data)
        _atomic_write_json(self.path, full)
        self.data = full  # sync in-memory with normalized values

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        merged = _deep_merge(self.data, partial)
        self.data = _validate(merged)

    # Convenience getters
    @property
    def cache_dir(self) -> str:
        return self.data["cache"]["dir"]

    @property
    def resolution(self) -> int:
        return self.data["mosaic"]["resolution"]


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
]
