"""High-level facade over the Sprint.ly API.

:class:`Interface` is what the CLI commands talk to. It combines the
:class:`~sly.client.Connector`, the :class:`~sly.cache.ResponseCache`,
the response classifier and the entity mapper into two kinds of call:

* **Reads** (:meth:`Interface.products`, :meth:`~Interface.people`,
  :meth:`~Interface.items`, :meth:`~Interface.get` and friends). Collections
  are served through the cache; single resources are fetched live. An API
  error never raises here: a collection becomes ``[]`` and a single
  resource becomes ``None``.
* **Writes** (:meth:`Interface.add_item`, :meth:`~Interface.update_item`).
  Updates always re-read the item live and send the payload computed by
  :func:`sly.updates.build_update_payload`.

Query strings are matched case-insensitively anywhere in the display
field: a person's last name, a product's name, an item's title. For items
a query starting with ``@`` matches the assignee instead, and ``@me`` means
the account in the connector's config.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional, Sequence, Union

from sly.cache import ResponseCache
from sly.client.connector import Connector
from sly.client.response import ResponseKind, classify, error_message
from sly.config import load_config, resolve_cache_dir
from sly.entities import Entity, EntityKind, Item, Person, Product, to_entity
from sly.models import SlyConfig
from sly.output import get_output
from sly.terms import TermDictionary, set_dictionary
from sly.updates import MUTABLE_ITEM_ATTRIBUTES, build_update_payload


ASSIGNEE_MARKER = "@"
ME = "me"


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


class Interface:
    """Typed, cached access to products, people and items.

    Args:
        connector: The Sprint.ly connector. Its ``config.email`` is the
            identity behind ``me`` / ``@me`` queries.
        cache: Response cache used for collection reads.

    Example::

        api = Interface.from_config()
        for item in api.items(query="@me"):
            print(item.number, item.title)
    """

    def __init__(self, connector: Connector, cache: ResponseCache) -> None:
        self.connector = connector
        self._cache = cache

    @classmethod
    def from_config(cls, config: Optional[SlyConfig] = None) -> Interface:
        """Build an interface from the user's config file.

        Also installs the config's term dictionary for :mod:`sly.terms`.

        Raises:
            ConfigMissingError: If there is no config to load.
            ConfigError: If the config is invalid.
        """
        if config is None:
            config = load_config()
        set_dictionary(TermDictionary(config.terms))
        return cls(Connector(config), ResponseCache(resolve_cache_dir(config)))

    def close(self) -> None:
        self.connector.close()

    # ------------------------------------------------------------------ #
    # Cache
    # ------------------------------------------------------------------ #

    def cache(self, key: str, producer: Callable[[], Any]) -> Any:
        """Return the cached payload for *key*, calling *producer* on a miss."""
        return self._cache.fetch(key, producer)

    def clear_cache(self) -> int:
        return self._cache.clear()

    def cache_stats(self) -> dict[str, Any]:
        return self._cache.stats()

    # ------------------------------------------------------------------ #
    # Collections
    # ------------------------------------------------------------------ #

    def list_entities(
        self,
        kind: Union[EntityKind, str],
        cache_key: Optional[str] = None,
        query: Optional[str] = None,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> list[Entity]:
        """Read a collection through the cache and return filtered entities.

        Args:
            kind: Which resource to list.
            cache_key: Cache file name; defaults to ``<kind>.json``, or a
                filter-specific name for filtered item listings.
            query: Text (or ``@assignee`` / ``me``) to match, see module docs.
            filters: Server-side item filters, e.g. ``{"status": "current"}``.

        Returns:
            The matching entities. ``[]`` if the API answered with an error.
        """
        kind = EntityKind(kind)
        if cache_key is None:
            cache_key = _collection_key(kind, filters)

        raw = self.cache(cache_key, lambda: self._fetch_collection(kind, filters))
        if self.error_object(raw):
            get_output().debug(f"{cache_key}: {error_message(raw)}, returning no {kind.value}")
            return []
        if classify(raw).kind is not ResponseKind.COLLECTION:
            return []

        entities = [to_entity(kind, obj) for obj in raw if isinstance(obj, dict)]
        if kind is EntityKind.ITEM:
            entities = [e for e in entities if not e.orphaned]

        if query:
            entities = [e for e in entities if self._matches(kind, e, query)]

        if kind is EntityKind.PERSON:
            entities.sort(key=lambda p: (p.last_name.lower(), p.first_name.lower()))
        return entities

    def products(self, query: Optional[str] = None) -> list[Product]:
        return self.list_entities(EntityKind.PRODUCT, query=query)

    def people(self, query: Optional[str] = None) -> list[Person]:
        return self.list_entities(EntityKind.PERSON, query=query)

    def items(
        self,
        filters: Optional[Mapping[str, Any]] = None,
        query: Optional[str] = None,
    ) -> list[Item]:
        return self.list_entities(EntityKind.ITEM, query=query, filters=filters)

    # ------------------------------------------------------------------ #
    # Single resources
    # ------------------------------------------------------------------ #

    def get(self, kind: Union[EntityKind, str], id: int) -> Optional[Entity]:
        """Fetch one resource live; ``None`` if the API answers with an error."""
        kind = EntityKind(kind)
        fetch = {
            EntityKind.PRODUCT: self.connector.product,
            EntityKind.PERSON: self.connector.person,
            EntityKind.ITEM: self.connector.item,
        }[kind]
        return self._typed(kind, fetch(id))

    def product(self, id: int) -> Optional[Product]:
        return self.get(EntityKind.PRODUCT, id)

    def person(self, id: int) -> Optional[Person]:
        return self.get(EntityKind.PERSON, id)

    def item(self, number: int) -> Optional[Item]:
        return self.get(EntityKind.ITEM, number)

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    def add_item(self, item: Union[Item, Mapping[str, Any]]) -> Optional[Item]:
        """Create an item and return it as the API echoes it back.

        Args:
            item: An :class:`~sly.entities.Item` or a plain attribute
                mapping (``type`` plus any mutable attributes).
        """
        if isinstance(item, Item):
            attributes = item.to_flat_dict()
        else:
            attributes = build_update_payload({}, item)
            attributes.pop("number", None)
            attributes["type"] = item.get("type") or "task"
        return self._typed(EntityKind.ITEM, self.connector.add_item(attributes))

    def build_update(self, number: int, draft: Mapping[str, Any]) -> Optional[dict[str, Any]]:
        """Compute the update payload for item *number* from a live read.

        Returns:
            The payload, or ``None`` when the item cannot be read or the
            record read back carries no ``number``.
        """
        current = self.connector.item(number)
        if classify(current).kind is not ResponseKind.OBJECT:
            return None
        if current.get("number") is None:
            get_output().debug(f"Item {number} read back without a number, not updating")
            return None
        payload = build_update_payload(current, draft)
        ignored = sorted(set(draft) - set(MUTABLE_ITEM_ATTRIBUTES))
        if ignored:
            get_output().debug(f"Ignoring non-updatable attributes: {', '.join(ignored)}")
        return payload

    def update_item(self, number: int, draft: Mapping[str, Any]) -> Optional[Item]:
        """Apply *draft* to item *number*; ``None`` if the item cannot be read or updated."""
        payload = self.build_update(number, draft)
        if payload is None:
            return None
        return self._typed(EntityKind.ITEM, self.connector.update_item(number, payload))

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def error_object(self, value: Any) -> bool:
        """True when *value* is an API error response."""
        return classify(value).is_error

    def _typed(self, kind: EntityKind, raw: Any) -> Optional[Entity]:
        if self.error_object(raw) or not isinstance(raw, dict):
            get_output().debug(f"No {kind.value} returned: {error_message(raw)}")
            return None
        return to_entity(kind, raw)

    def _fetch_collection(
        self, kind: EntityKind, filters: Optional[Mapping[str, Any]]
    ) -> Any:
        if kind is EntityKind.PRODUCT:
            return self.connector.products()
        if kind is EntityKind.PERSON:
            return self.connector.people()
        return self.connector.items(filters)

    def _my_email(self) -> str:
        config = getattr(self.connector, "config", None)
        return (getattr(config, "email", None) or "").lower()

    def _matches(self, kind: EntityKind, entity: Any, query: str) -> bool:
        if kind is EntityKind.PRODUCT:
            return _contains(entity.name, query)
        if kind is EntityKind.PERSON:
            if query == ME:
                me = self._my_email()
                return bool(me) and entity.email.lower() == me
            return _contains(entity.last_name, query)

        if query.startswith(ASSIGNEE_MARKER):
            token = query[len(ASSIGNEE_MARKER):]
            assignee = entity.assigned_to
            if assignee is None:
                return False
            if token == ME:
                me = self._my_email()
                return bool(me) and assignee.email.lower() == me
            return _contains(assignee.full_name, token)
        return _contains(entity.title, query)


def _collection_key(kind: EntityKind, filters: Optional[Mapping[str, Any]]) -> str:
    """Cache file name for a collection, distinct per item filter set."""
    if kind is not EntityKind.ITEM or not filters:
        return kind.cache_key
    parts: list[str] = []
    for key in sorted(filters):
        value = filters[key]
        if isinstance(value, Sequence) and not isinstance(value, str):
            value = ",".join(str(v) for v in value)
        parts.append(f"{key}-{value}")
    slug = "_".join(parts).replace("/", "-").replace("\\", "-")
    return f"{kind.value}_{slug}.json"
