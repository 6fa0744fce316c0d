"""File-per-key JSON cache for raw API responses.

``fetch(key, producer)`` returns the decoded contents of ``<cache_dir>/<key>``
when that file exists, without calling *producer*. Otherwise it creates the
cache directory, calls *producer* exactly once, writes its result as JSON
and returns it.

Writes are atomic (see :func:`sly.config.atomic_write`): a crash while
serialising never leaves a truncated file for the next read. There is no
locking; two processes missing the same key both call their producer and
the last rename wins.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

from sly.config import atomic_write
from sly.exceptions import InvalidUsageError

logger = logging.getLogger(__name__)


class ResponseCache:
    """Disk-backed memoisation of raw API payloads.

    Args:
        cache_dir: Directory holding one JSON file per key. It is created
            (with any missing parents) on the first miss.

    Example::

        cache = ResponseCache("~/.cache/sly")
        products = cache.fetch("products.json", connector.products)
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self._cache_dir = Path(cache_dir).expanduser()

    @property
    def directory(self) -> Path:
        return self._cache_dir

    def path_for(self, key: str) -> Path:
        """Return the file backing *key*.

        Raises:
            InvalidUsageError: If *key* is empty or not a plain file name.
        """
        if not key or key in (".", "..") or "/" in key or "\\" in key:
            raise InvalidUsageError(f"Invalid cache key: {key!r}")
        return self._cache_dir / key

    def contains(self, key: str) -> bool:
        return self.path_for(key).is_file()

    def fetch(self, key: str, producer: Callable[[], Any]) -> Any:
        """Return the payload cached under *key*, producing it on a miss.

        Args:
            key: Cache file name, e.g. ``"products.json"``.
            producer: Zero-argument callable returning JSON-serialisable
                data. Not called on a hit.

        Returns:
            The decoded cached payload, or the producer's result.

        Raises:
            OSError: If the directory or file cannot be created or read.
            Exception: Whatever *producer* raises; nothing is written then.
        """
        path = self.path_for(key)
        if path.is_file():
            logger.debug("Cache hit: %s", path)
            return json.loads(path.read_text(encoding="utf-8"))

        logger.debug("Cache miss: %s", path)
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        data = producer()
        atomic_write(path, json.dumps(data))
        return data

    def clear(self) -> int:
        """Delete every cached file and return how many were removed."""
        if not self._cache_dir.is_dir():
            return 0
        removed = 0
        for path in self._cache_dir.glob("*.json"):
            path.unlink()
            removed += 1
        return removed

    def stats(self) -> dict[str, Any]:
        """Return the cache directory and the keys currently stored in it."""
        keys: list[str] = []
        if self._cache_dir.is_dir():
            keys = sorted(p.name for p in self._cache_dir.glob("*.json") if p.is_file())
        return {
            "directory": str(self._cache_dir),
            "size": len(keys),
            "keys": keys,
        }
