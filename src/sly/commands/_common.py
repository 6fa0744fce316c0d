"""Helpers shared by the sly sub-commands: interface bootstrap and table rows."""

from __future__ import annotations

from typing import Sequence

import typer

from sly.entities import Item, Person, Product
from sly.exceptions import ConfigMissingError
from sly.interface import Interface
from sly.output import error, suggest


ITEM_HEADERS = ["Number", "Type", "State", "Score", "Assignee", "Title"]
PERSON_HEADERS = ["Id", "Name", "Email"]
PRODUCT_HEADERS = ["Id", "Name"]


def interface_or_exit() -> Interface:
    """Return an :class:`Interface` built from config, or report and exit.

    A missing config prints ``ERROR: Config File Missing`` on stderr and
    exits with the error's exit code. Other config problems propagate to
    :func:`sly.app.main`.
    """
    try:
        return Interface.from_config()
    except ConfigMissingError as exc:
        error(str(exc))
        suggest("Run: sly setup")
        raise typer.Exit(code=exc.exit_code) from None


def item_rows(items: Sequence[Item]) -> list[list[str]]:
    return [
        [
            str(item.number or ""),
            item.type,
            item.state,
            item.score,
            item.assignee_name,
            item.title,
        ]
        for item in items
    ]


def person_rows(people: Sequence[Person]) -> list[list[str]]:
    return [[str(p.id or ""), p.full_name, p.email] for p in people]


def product_rows(products: Sequence[Product]) -> list[list[str]]:
    return [[str(p.id or ""), p.name] for p in products]
