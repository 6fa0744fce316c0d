"""Pydantic configuration models for sly.

These models describe the JSON config file stored in the user's config
directory (see :mod:`sly.config`). Domain entities (people, products,
items) live in :mod:`sly.entities`; this module only holds settings.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from sly.output import OutputFormat
from sly.terms import DEFAULT_TERMS


DEFAULT_BASE_URL = "https://sprint.ly/api"


class RequestConfig(BaseModel):
    """HTTP settings applied to every call made by the connector."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class CacheConfig(BaseModel):
    """Location of the on-disk response cache."""

    directory: Optional[str] = Field(
        default=None,
        description="Cache directory; defaults to the XDG cache dir when unset",
    )


class OutputConfig(BaseModel):
    """Default output format, used when neither ``--json`` nor ``--plain`` is given."""

    format: OutputFormat = Field(
        default=OutputFormat.AUTO, description="Output format: auto, json, plain, rich"
    )


class SlyConfig(BaseModel):
    """User configuration persisted at ``~/.config/sly/config.json``.

    ``email`` doubles as the identity used for ``@me`` filters. The
    ``terms`` mapping is the common-name -> API-name dictionary installed
    into :mod:`sly.terms` when an :class:`~sly.interface.Interface` is
    built from this config.

    Example::

        SlyConfig(email="me@example.com", api_key="abc123", product_id=42)
    """

    model_config = ConfigDict(extra="allow")

    email: str
    api_key: str
    product_id: Optional[int] = None
    base_url: str = DEFAULT_BASE_URL
    terms: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_TERMS))
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
