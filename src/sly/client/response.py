"""Classification of decoded Sprint.ly responses.

Sprint.ly reports failures with a JSON object such as::

    {"code": 403, "message": "Forbidden"}

and otherwise returns either a single resource object or a list of them.
:func:`classify` is the one place that inspects a payload's shape; callers
branch on the resulting :class:`ResponseKind` instead of sniffing keys
themselves.

Nothing here raises. A payload that does not look like an error is
classified as a resource even if it is otherwise malformed.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any


class ResponseKind(str, enum.Enum):
    """The three shapes a decoded response can take."""

    ERROR = "error"
    OBJECT = "object"
    COLLECTION = "collection"


@dataclass(frozen=True)
class ClassifiedResponse:
    """A decoded payload tagged with its :class:`ResponseKind`."""

    kind: ResponseKind
    payload: Any

    @property
    def is_error(self) -> bool:
        return self.kind is ResponseKind.ERROR


def _as_status(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value)
    return None


def is_error_object(value: Any) -> bool:
    """Return ``True`` if *value* is a single object shaped like an API error.

    Lists are never errors. An object is an error when it has a failing
    HTTP ``code`` (400 or above) next to a ``message``, or an ``error``
    field next to a ``code`` or ``status``.
    """
    if not isinstance(value, dict):
        return False
    code = _as_status(value.get("code"))
    if code is not None and code >= 400 and "message" in value:
        return True
    if "error" in value and ("code" in value or "status" in value):
        return True
    return False


def classify(value: Any) -> ClassifiedResponse:
    """Tag *value* as an error, a single resource, or a collection.

    Payloads that are neither objects nor lists (``None``, bare strings
    from a non-JSON body) are treated as errors.
    """
    if isinstance(value, list):
        return ClassifiedResponse(ResponseKind.COLLECTION, value)
    if isinstance(value, dict):
        if is_error_object(value):
            return ClassifiedResponse(ResponseKind.ERROR, value)
        return ClassifiedResponse(ResponseKind.OBJECT, value)
    return ClassifiedResponse(ResponseKind.ERROR, value)


def error_message(value: Any) -> str:
    """Return a one-line description of an error payload for display."""
    if isinstance(value, dict):
        code = value.get("code") or value.get("status")
        msg = value.get("message") or value.get("error") or ""
        if code and msg:
            return f"HTTP {code}: {msg}"
        return str(msg or code or "Unknown API error")
    if value is None:
        return "Empty response"
    return str(value)[:200]
