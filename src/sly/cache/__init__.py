"""On-disk response caching for sly.

This package provides :class:`ResponseCache`, which memoises the raw JSON
returned by collection fetches (``products.json``, ``people.json``,
``items.json``) as one file per key. A cached file is served until it is
removed; there is no TTL.
"""

from sly.cache.cache import ResponseCache

__all__ = ["ResponseCache"]
