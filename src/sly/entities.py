"""Typed views over raw Sprint.ly JSON objects.

Every entity is a Pydantic model that ignores unknown keys and defaults
every missing field, so any decoded object that is not an error can be
mapped without failing.

Items are polymorphic. The ``type`` discriminant picks the concrete
class from :data:`ITEM_TYPES` (``task``, ``story``, ``defect``,
``test``); an absent or unknown type yields a plain :class:`Item`.
:func:`to_entity` is the single entry point used by
:class:`~sly.interface.Interface`.
"""

from __future__ import annotations

import enum
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from sly.terms import api_term


class EntityKind(str, enum.Enum):
    """Resource kinds, valued by their collection cache key stem."""

    PRODUCT = "products"
    PERSON = "people"
    ITEM = "items"

    @property
    def cache_key(self) -> str:
        return f"{self.value}.json"


class Entity(BaseModel):
    """Base for all entities: unknown fields are dropped, ``null`` means default."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Person(Entity):
    """A member of a product."""

    id: Optional[int] = None
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    admin: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Product(Entity):
    id: Optional[int] = None
    name: str = ""
    archived: bool = False
    admin: bool = False


def _reference(value: Any) -> Any:
    """Keep nested references only when they are objects."""
    return value if isinstance(value, dict) else None


class Item(Entity):
    """A Sprint.ly item; also the fallback for unknown item types.

    ``status`` holds the API's value; :attr:`state` gives it in sly's
    vocabulary. ``tags`` is always a list even when the API (or a caller)
    supplies a comma-delimited string.
    """

    ITEM_TYPE: ClassVar[Optional[str]] = None

    number: Optional[int] = None
    type: str = ""
    title: str = ""
    description: str = ""
    status: str = ""
    score: str = ""
    tags: list[str] = []
    assigned_to: Optional[Person] = None
    created_by: Optional[Person] = None
    product: Optional[Product] = None
    parent: Optional[dict[str, Any]] = None
    short_url: str = ""

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tags(cls, value: Any) -> list[str]:
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        if isinstance(value, (list, tuple)):
            return [str(tag) for tag in value]
        return []

    @field_validator("assigned_to", "created_by", "product", mode="before")
    @classmethod
    def _object_reference(cls, value: Any) -> Any:
        return _reference(value)

    @field_validator("parent", mode="before")
    @classmethod
    def _parent_reference(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return {"number": value}
        return _reference(value)

    @classmethod
    def new_typed(cls, raw: dict[str, Any]) -> Item:
        """Build the :data:`ITEM_TYPES` variant selected by ``raw["type"]``."""
        item_type = raw.get("type")
        item_cls = ITEM_TYPES.get(item_type.lower(), Item) if isinstance(item_type, str) else Item
        return item_cls.model_validate(raw)

    @property
    def state(self) -> str:
        return api_term(self.status)

    @property
    def assignee_name(self) -> str:
        return self.assigned_to.full_name if self.assigned_to else ""

    @property
    def orphaned(self) -> bool:
        """True when the item's product is unknown or its parent cannot be resolved."""
        if self.product is None or self.product.id is None:
            return True
        if self.parent is not None and self.parent.get("number") is None:
            return True
        return False

    def to_flat_dict(self) -> dict[str, Any]:
        """Flatten into the form-field mapping the create endpoint accepts."""
        data: dict[str, Any] = {
            "type": self.type or self.ITEM_TYPE or "task",
            "title": self.title,
            "description": self.description,
            "score": self.score,
            "status": self.status,
            "tags": ",".join(self.tags),
        }
        if self.assigned_to is not None and self.assigned_to.id is not None:
            data["assigned_to"] = self.assigned_to.id
        return {key: value for key, value in data.items() if value not in ("", None)}


class TaskItem(Item):
    ITEM_TYPE: ClassVar[Optional[str]] = "task"


class DefectItem(Item):
    ITEM_TYPE: ClassVar[Optional[str]] = "defect"


class QaItem(Item):
    """A Sprint.ly ``test`` item."""

    ITEM_TYPE: ClassVar[Optional[str]] = "test"


class StoryItem(Item):
    """A user story. Sprint.ly stores stories as who/what/why."""

    ITEM_TYPE: ClassVar[Optional[str]] = "story"

    who: str = ""
    what: str = ""
    why: str = ""

    @model_validator(mode="after")
    def _compose_title(self) -> StoryItem:
        if not self.title and (self.who or self.what or self.why):
            self.title = f"As a {self.who} I want {self.what} so that {self.why}"
        return self

    def to_flat_dict(self) -> dict[str, Any]:
        data = super().to_flat_dict()
        data.pop("title", None)
        data.update({k: v for k, v in (("who", self.who), ("what", self.what), ("why", self.why)) if v})
        return data


ITEM_TYPES: dict[str, type[Item]] = {
    "task": TaskItem,
    "story": StoryItem,
    "defect": DefectItem,
    "test": QaItem,
}


def to_entity(kind: EntityKind | str, raw: dict[str, Any]) -> Entity:
    """Map a raw decoded object to the entity class for *kind*."""
    kind = EntityKind(kind)
    if kind is EntityKind.ITEM:
        return Item.new_typed(raw)
    if kind is EntityKind.PERSON:
        return Person.model_validate(raw)
    return Product.model_validate(raw)
