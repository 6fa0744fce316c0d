"""Two-way dictionary between sly's vocabulary and Sprint.ly's.

Sprint.ly calls an item that is being worked on ``in-progress``; sly calls
it ``current``. A :class:`TermDictionary` holds one common-name ->
API-name mapping and answers lookups in both directions, returning the
input unchanged when it has no entry for it.

The mapping is treated as a bijection. If two common names map to the
same API name, which one :meth:`TermDictionary.api_term` returns is
unspecified.

A process-wide dictionary is installed with :func:`set_dictionary` (done by
:meth:`sly.interface.Interface.from_config`) and read through the module
level :func:`api_term` and :func:`common_term` helpers.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional


DEFAULT_TERMS: Mapping[str, str] = MappingProxyType(
    {
        "current": "in-progress",
        "complete": "completed",
        "bug": "defect",
    }
)
"""Common name -> Sprint.ly API name."""


class TermDictionary:
    """Read-only lookups between common names and API names.

    Args:
        terms: Mapping of common name to API name.
    """

    def __init__(self, terms: Mapping[str, str] = DEFAULT_TERMS) -> None:
        self._to_api = MappingProxyType(dict(terms))
        self._to_common = MappingProxyType({v: k for k, v in terms.items()})

    @property
    def terms(self) -> Mapping[str, str]:
        return self._to_api

    def api_term(self, value: str) -> str:
        """Return the common name whose API name is *value*, or *value* itself."""
        return self._to_common.get(value, value)

    def common_term(self, value: str) -> str:
        """Return the API name stored under common name *value*, or *value* itself."""
        return self._to_api.get(value, value)


# ------------------------------------------------------------------ #
# Global dictionary (installed at config-load time)
# ------------------------------------------------------------------ #

_dictionary: Optional[TermDictionary] = None


def get_dictionary() -> TermDictionary:
    """Return the installed dictionary, creating one from :data:`DEFAULT_TERMS` on first use."""
    global _dictionary
    if _dictionary is None:
        _dictionary = TermDictionary()
    return _dictionary


def set_dictionary(dictionary: TermDictionary) -> None:
    global _dictionary
    _dictionary = dictionary


def reset_dictionary() -> None:
    """Drop the installed dictionary. Used by the test suite."""
    global _dictionary
    _dictionary = None


def api_term(value: str) -> str:
    """Translate an API name to its common name via the installed dictionary."""
    return get_dictionary().api_term(value)


def common_term(value: str) -> str:
    """Translate a common name to its API name via the installed dictionary."""
    return get_dictionary().common_term(value)
