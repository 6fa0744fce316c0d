"""Sprint.ly client boundary for sly.

* :class:`Connector` -- blocking httpx client returning decoded JSON,
  including error objects, untouched.
* :func:`classify` / :func:`is_error_object` -- the response classifier
  that tells error objects apart from resources and collections.

Example::

    from sly.client import Connector, is_error_object

    with Connector(config) as connector:
        raw = connector.product(42)
        if not is_error_object(raw):
            ...
"""

from sly.client.connector import Connector
from sly.client.response import (
    ClassifiedResponse,
    ResponseKind,
    classify,
    error_message,
    is_error_object,
)

__all__ = [
    "ClassifiedResponse",
    "Connector",
    "ResponseKind",
    "classify",
    "error_message",
    "is_error_object",
]
