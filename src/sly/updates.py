"""Build the attribute payload for an item update.

Sprint.ly's update endpoint takes a flat form: scalar values only, tags
as one comma-delimited string, people by id. :func:`build_update_payload`
merges a caller's draft into the item's current attributes and keeps only
the attributes listed in :data:`MUTABLE_ITEM_ATTRIBUTES`.

Rules:

* ``number`` is always copied from the current item, never from the draft.
* ``type`` is not in the allow-list, so an item can never change type.
* Draft keys outside the allow-list are dropped without error.
* Sequences are joined with commas, person objects reduced to their id,
  and draft ``status`` values translated to the API vocabulary.
* ``None`` values are left out.

Example::

    >>> build_update_payload(
    ...     {"type": "task", "number": 7, "score": "S", "tags": "a,b"},
    ...     {"score": "M", "bogus": True},
    ... )
    {'number': 7, 'score': 'M', 'tags': 'a,b'}
"""

from __future__ import annotations

from typing import Any, Mapping

from sly.terms import common_term


MUTABLE_ITEM_ATTRIBUTES: tuple[str, ...] = (
    "number",
    "title",
    "who",
    "what",
    "why",
    "description",
    "score",
    "status",
    "assigned_to",
    "tags",
)
"""Attributes allowed in an update payload, in payload order."""

_IDENTITY_ATTRIBUTE = "number"


def _flatten(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    if isinstance(value, Mapping):
        # nested person reference, e.g. "assigned_to": {"id": 3, ...}
        return value.get("id")
    return value


def build_update_payload(
    current: Mapping[str, Any],
    draft: Mapping[str, Any],
) -> dict[str, Any]:
    """Merge *draft* over *current* and keep the mutable attributes.

    Args:
        current: The item's raw attributes as last fetched from the API.
        draft: Proposed changes keyed by attribute name.

    Returns:
        The payload for ``Connector.update_item``.
    """
    payload: dict[str, Any] = {}
    for name in MUTABLE_ITEM_ATTRIBUTES:
        if name in draft and name != _IDENTITY_ATTRIBUTE:
            value = draft[name]
            if name == "status" and isinstance(value, str):
                value = common_term(value)
        elif name in current:
            value = current[name]
        else:
            continue
        value = _flatten(value)
        if value is not None:
            payload[name] = value
    return payload
