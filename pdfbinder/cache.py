"""Thread-safe LRU cache for preview thumbnails.

Thumbnails are keyed by record id, so an entry stays valid while the record
moves around the collection and is dropped explicitly when the record is
removed.  Values are whatever the caller renders (``QPixmap`` in the UI,
Pillow images in tests); the cache never inspects them.
"""

from __future__ import annotations

from collections import OrderedDict
from threading import RLock
from typing import Any, Iterable, Optional

from . import config


class ThumbnailCache:
    """A simple thread-safe LRU cache."""

    def __init__(self, max_size: int = config.THUMBNAIL_CACHE_SIZE) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be greater than zero")
        self.max_size = max_size
        self._cache: "OrderedDict[str, Any]" = OrderedDict()
        self._lock = RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cache

    def get(self, key: str) -> Optional[Any]:
        """Return the thumbnail for *key* or ``None``.

        Accessing an item marks it as most recently used.
        """
        with self._lock:
            try:
                value = self._cache.pop(key)
            except KeyError:
                return None
            self._cache[key] = value  # re-insert as most recent
            return value

    def put(self, key: str, thumbnail: Any) -> None:
        """Insert *key*, evicting the least recently used entry when full."""
        with self._lock:
            if key in self._cache:
                self._cache.pop(key)
            elif len(self._cache) >= self.max_size:
                self._cache.popitem(last=False)
            self._cache[key] = thumbnail

    def discard(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)

    def retain(self, keys: Iterable[str]) -> None:
        """Drop every entry whose key is not in *keys*."""
        keep = set(keys)
        with self._lock:
            for key in [k for k in self._cache if k not in keep]:
                del self._cache[key]

    def clear(self) -> None:
        """Remove all cached entries."""
        with self._lock:
            self._cache.clear()


__all__ = ["ThumbnailCache"]
