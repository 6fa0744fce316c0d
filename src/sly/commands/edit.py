"""Write commands: ``add`` and ``update``.

``update`` sends only attributes Sprint.ly accepts for an item; the item's
type cannot be changed and its number always comes from the live record.

Example::

    sly add task "Fix login redirect" --score S --tags auth,web
    sly update 1234 --status current --assign 42
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from sly.commands._common import ITEM_HEADERS, interface_or_exit, item_rows
from sly.entities import ITEM_TYPES
from sly.exit_codes import EXIT_INVALID_USAGE, EXIT_NOT_FOUND
from sly.output import error, info, print_table, success


def _draft(
    title: Optional[str],
    description: Optional[str],
    score: Optional[str],
    status: Optional[str],
    tags: Optional[str],
    assign: Optional[int],
) -> dict[str, Any]:
    draft: dict[str, Any] = {
        "title": title,
        "description": description,
        "score": score,
        "status": status,
        "assigned_to": assign,
    }
    if tags is not None:
        draft["tags"] = [tag.strip() for tag in tags.split(",") if tag.strip()]
    return {key: value for key, value in draft.items() if value is not None}


def add_command(
    item_type: str = typer.Argument(help="Item type: task, story, defect or test."),
    title: str = typer.Argument(help="Item title."),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    score: Optional[str] = typer.Option(None, "--score", help="~, S, M, L or XL."),
    status: Optional[str] = typer.Option(None, "--status", help="e.g. backlog, current."),
    tags: Optional[str] = typer.Option(None, "--tags", help="Comma-separated tags."),
    assign: Optional[int] = typer.Option(None, "--assign", help="Assignee person id."),
) -> None:
    """Create a new item on the current product."""
    if item_type.lower() not in ITEM_TYPES:
        error(f"Unknown item type: {item_type}")
        raise typer.Exit(code=EXIT_INVALID_USAGE)

    attributes = _draft(title, description, score, status, tags, assign)
    attributes["type"] = item_type.lower()

    api = interface_or_exit()
    try:
        item = api.add_item(attributes)
    finally:
        api.close()
    if item is None:
        error("Sprint.ly rejected the new item")
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    success(f"Created item {item.number}")
    print_table(ITEM_HEADERS, item_rows([item]))


def update_command(
    number: int = typer.Argument(help="Item number."),
    title: Optional[str] = typer.Option(None, "--title"),
    description: Optional[str] = typer.Option(None, "--description", "-d"),
    score: Optional[str] = typer.Option(None, "--score", help="~, S, M, L or XL."),
    status: Optional[str] = typer.Option(None, "--status", help="e.g. backlog, current."),
    tags: Optional[str] = typer.Option(None, "--tags", help="Comma-separated tags (replaces)."),
    assign: Optional[int] = typer.Option(None, "--assign", help="Assignee person id."),
) -> None:
    """Update attributes of an existing item."""
    draft = _draft(title, description, score, status, tags, assign)
    if not draft:
        info("Nothing to update.")
        return

    api = interface_or_exit()
    try:
        item = api.update_item(number, draft)
    finally:
        api.close()
    if item is None:
        error(f"Item {number} could not be updated")
        raise typer.Exit(code=EXIT_NOT_FOUND)
    success(f"Updated item {item.number}")
    print_table(ITEM_HEADERS, item_rows([item]))
