"""Read-only commands: ``products``, ``people``, ``items`` and ``item``.

Listings are served from the response cache (``sly cache clear`` forces a
refetch). An API error shows up as an empty listing, never a traceback.

Example::

    sly products
    sly people ray
    sly items @me --status current
    sly item 1234
"""

from __future__ import annotations

from typing import Optional

import typer

from sly.commands._common import (
    ITEM_HEADERS,
    PERSON_HEADERS,
    PRODUCT_HEADERS,
    interface_or_exit,
    item_rows,
    person_rows,
    product_rows,
)
from sly.exit_codes import EXIT_NOT_FOUND
from sly.output import error, format_response, info, print_table


def products_command(
    query: Optional[str] = typer.Argument(None, help="Only products whose name contains this."),
) -> None:
    """List products visible to your account."""
    api = interface_or_exit()
    try:
        products = api.products(query)
    finally:
        api.close()
    if not products:
        info("No products found.")
        return
    print_table(PRODUCT_HEADERS, product_rows(products), title="Products")


def people_command(
    query: Optional[str] = typer.Argument(
        None, help="Last-name fragment, or 'me' for your own entry."
    ),
) -> None:
    """List the people on the current product, sorted by last name."""
    api = interface_or_exit()
    try:
        people = api.people(query)
    finally:
        api.close()
    if not people:
        info("No people found.")
        return
    print_table(PERSON_HEADERS, person_rows(people), title="People")


def items_command(
    query: Optional[str] = typer.Argument(
        None, help="Title fragment, '@name' for an assignee, or '@me'."
    ),
    status: Optional[list[str]] = typer.Option(
        None, "--status", "-s", help="Only items in this state (repeatable), e.g. current."
    ),
    item_type: Optional[list[str]] = typer.Option(
        None, "--type", "-t", help="Only items of this type (repeatable), e.g. story."
    ),
) -> None:
    """List the current product's items."""
    filters: dict[str, list[str]] = {}
    if status:
        filters["status"] = status
    if item_type:
        filters["type"] = item_type

    api = interface_or_exit()
    try:
        items = api.items(filters or None, query)
    finally:
        api.close()
    if not items:
        info("No items found.")
        return
    print_table(ITEM_HEADERS, item_rows(items), title="Items")


def item_command(
    number: int = typer.Argument(help="Item number."),
) -> None:
    """Show a single item, fetched live."""
    api = interface_or_exit()
    try:
        item = api.item(number)
    finally:
        api.close()
    if item is None:
        error(f"Item {number} not found")
        raise typer.Exit(code=EXIT_NOT_FOUND)
    data = item.model_dump(mode="json")
    data["state"] = item.state
    format_response(data)
