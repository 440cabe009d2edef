#!/usr/bin/env python3
# emoji_mosaic/resources.py
"""
Resource lookup for color maps and source images.

Locations are local paths or http(s) URLs. URLs go through ResourceCache:
- SHA1-namespaced files under the cache directory.
- Thread-safe disk read/write.
- Automatic retry using urllib3 Retry.
- Size-based pruning, oldest first.
"""

from __future__ import annotations

import hashlib
import logging
import os
import threading
from pathlib import Path
from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from emoji_mosaic.errors import MissingSourceError

log = logging.getLogger(__name__)

__all__ = ["ResourceCache", "is_url", "read_resource"]

DEFAULT_USER_AGENT = "emoji-mosaic/1.2 (+https://example.invalid)"


def is_url(location: str) -> bool:
    return location.lower().startswith(("http://", "https://"))


def _default_cache_dir() -> Path:
    from emoji_mosaic.config import _os_cache_home
    return Path(_os_cache_home()) / "resources"


# -------------------------
# ResourceCache
# -------------------------

class ResourceCache:
    """
    Persistent download cache with HTTP retry.
    Thread-safe. Safe for multi-reader use.
    """

    def __init__(
        self,
        cache_dir: Optional[Path] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        connect_timeout: float = 5.0,
        read_timeout: float = 15.0,
        retries: int = 3,
        pool_size: int = 4,
    ):
        self.root_dir = Path(cache_dir) if cache_dir else _default_cache_dir()
        self.root_dir.mkdir(parents=True, exist_ok=True)
        self.timeout = (connect_timeout, read_timeout)

        # HTTP session with retry
        self.session = requests.Session()
        self.session.headers["User-Agent"] = user_agent
        retry = Retry(
            total=retries,
            connect=retries,
            read=retries,
            backoff_factor=0.3,
            status_forcelist=(429, 500, 502, 503, 504),
            allowed_methods=False,
        )
        adapter = HTTPAdapter(max_retries=retry, pool_connections=pool_size, pool_maxsize=pool_size)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self._lock = threading.Lock()

    def _entry_path(self, url: str) -> Path:
        h = hashlib.sha1(url.encode("utf-8")).hexdigest()
        return self.root_dir / h[:2] / h

    def fetch(self, url: str) -> bytes:
        """Return the body of url, from disk if cached."""
        p = self._entry_path(url)
        with self._lock:
            if p.exists():
                log.debug("Cache hit for %s", url)
                return p.read_bytes()

        log.debug("Downloading %s", url)
        try:
            r = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise MissingSourceError(url, str(e)) from e
        if r.status_code != 200:
            raise MissingSourceError(url, f"HTTP {r.status_code}")

        data = r.content
        with self._lock:
            p.parent.mkdir(parents=True, exist_ok=True)
            tmp = p.with_suffix(".part")
            tmp.write_bytes(data)
            os.replace(tmp, p)
        return data

    def prune(self, max_bytes: int, watermark: float = 0.85) -> int:
        """
        Delete oldest files if cache exceeds max_bytes.
        Returns number of files removed.
        """
        files: List[Path] = [p for p in self.root_dir.rglob("*") if p.is_file()]
        total = sum(p.stat().st_size for p in files)
        if total <= max_bytes:
            return 0
        files.sort(key=lambda p: p.stat().st_mtime)
        target = int(max_bytes * watermark)
        removed = 0
        with self._lock:
            for f in files:
                if total <= target:
                    break
                try:
                    s = f.stat().st_size
                    f.unlink()
                except OSError:
                    continue
                total -= s
                removed += 1
        log.debug("Pruned %d cached files from %s", removed, self.root_dir)
        return removed

    def close(self) -> None:
        self.session.close()


# -------------------------
# Lookup
# -------------------------

def read_resource(location: str, cache: Optional[ResourceCache] = None) -> bytes:
    """Read a local file or URL; MissingSourceError if it cannot be opened."""
    if is_url(location):
        if cache is not None:
            return cache.fetch(location)
        cache = ResourceCache()
        try:
            return cache.fetch(location)
        finally:
            cache.close()

    path = os.path.expanduser(location)
    if os.path.isdir(path):
        raise MissingSourceError(location, "is a directory")
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise MissingSourceError(location, e.strerror or str(e)) from e
