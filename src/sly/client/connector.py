"""Thin httpx wrapper around the Sprint.ly REST API.

:class:`Connector` performs the actual HTTP calls for
:class:`~sly.interface.Interface`. It authenticates with HTTP basic auth
(account email + API key), decodes every response body as JSON and hands
it back *as is*: an error response such as ``{"code": 404, ...}`` is
returned, not raised, so that :mod:`sly.client.response` can classify it.

Only network-level failures raise (:class:`~sly.exceptions.ConnectionError_`).
There is no retry; a failed call fails once.

Endpoints used::

    GET  /products.json
    GET  /products/{id}.json
    GET  /products/{product}/people.json
    GET  /products/{product}/people/{id}.json
    GET  /products/{product}/items.json
    GET  /products/{product}/items/{number}.json
    POST /products/{product}/items.json
    POST /products/{product}/items/{number}.json
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from sly.client.response import is_error_object
from sly.exceptions import ConfigError, ConnectionError_
from sly.models import SlyConfig
from sly.output import get_output
from sly.terms import common_term


class Connector:
    """Blocking Sprint.ly client.

    Args:
        config: Credentials, product id, base URL and request settings.
            Exposed as :attr:`config`; ``config.email`` is the identity
            ``@me`` filters resolve to.
        transport: Optional httpx transport, used by the tests to plug in
            :class:`httpx.MockTransport`.

    Example::

        with Connector(config) as connector:
            raw_items = connector.items({"status": "current"})
    """

    def __init__(
        self,
        config: SlyConfig,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Connector:
        self._http()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def _http(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.config.base_url.rstrip("/"),
                auth=(self.config.email, self.config.api_key),
                timeout=self.config.request.timeout,
                verify=self.config.request.verify_ssl,
                headers={"Accept": "application/json"},
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    # ------------------------------------------------------------------ #
    # Products
    # ------------------------------------------------------------------ #

    def products(self) -> Any:
        return self._request("GET", "/products.json")

    def product(self, product_id: int) -> Any:
        return self._request("GET", f"/products/{product_id}.json")

    # ------------------------------------------------------------------ #
    # People
    # ------------------------------------------------------------------ #

    def people(self) -> Any:
        return self._request("GET", f"{self._product_path()}/people.json")

    def person(self, person_id: int) -> Any:
        return self._request("GET", f"{self._product_path()}/people/{person_id}.json")

    # ------------------------------------------------------------------ #
    # Items
    # ------------------------------------------------------------------ #

    def items(self, filters: Optional[Mapping[str, Any]] = None) -> Any:
        """Fetch the product's items.

        Filter values are given in sly's vocabulary and translated to
        Sprint.ly's with :func:`~sly.terms.common_term` (``current`` becomes
        ``in-progress``). List values are sent comma-joined.
        """
        params = {key: _filter_value(value) for key, value in (filters or {}).items()}
        return self._request("GET", f"{self._product_path()}/items.json", params=params or None)

    def item(self, number: int) -> Any:
        return self._request("GET", f"{self._product_path()}/items/{number}.json")

    def add_item(self, attributes: Mapping[str, Any]) -> Any:
        return self._request("POST", f"{self._product_path()}/items.json", data=attributes)

    def update_item(self, number: int, attributes: Mapping[str, Any]) -> Any:
        return self._request(
            "POST", f"{self._product_path()}/items/{number}.json", data=attributes
        )

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _product_path(self) -> str:
        if self.config.product_id is None:
            raise ConfigError("No product selected. Run: sly setup --product <id>")
        return f"/products/{self.config.product_id}"

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """Send one request and return its decoded body.

        A failing status (4xx/5xx) whose body is not already error-shaped,
        and any body that is not JSON, is wrapped as
        ``{"code": <status>, "message": ...}`` so it classifies as an error
        downstream.
        """
        output = get_output()
        output.debug(f"{method} {path}")
        try:
            response = self._http().request(
                method,
                path,
                params=dict(params) if params else None,
                data=dict(data) if data is not None else None,
            )
        except (httpx.ConnectError, httpx.TimeoutException, httpx.NetworkError) as exc:
            raise ConnectionError_(f"Connection failed: {exc}") from exc

        output.debug(f"HTTP {response.status_code} {method} {path}")
        try:
            body = response.json()
        except ValueError:
            return _error_body(response, response.text)
        if response.status_code >= 400 and not is_error_object(body):
            return _error_body(response, _body_message(body))
        return body


def _body_message(body: Any) -> str:
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            if isinstance(body.get(key), str):
                return body[key]
    return ""


def _error_body(response: httpx.Response, message: str) -> dict[str, Any]:
    body: dict[str, Any] = {
        "code": response.status_code,
        "message": message[:200] or response.reason_phrase,
    }
    if response.status_code < 400:
        # a successful status with an undecodable body
        body["error"] = "Invalid JSON response"
    return body


def _filter_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(common_term(str(v)) for v in value)
    return common_term(str(value))
