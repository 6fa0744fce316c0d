"""Config commands -- ``sly setup`` and the ``sly config`` group.

``setup`` writes the config file (email, API key, product) that every
other command needs; ``config show`` prints it with the API key masked.
"""

from __future__ import annotations

from typing import Optional

import typer

from sly.output import format_response, info, success, suggest, warning


config_app = typer.Typer(no_args_is_help=True)


def setup_command(
    email: str = typer.Option(..., "--email", prompt=True, help="Sprint.ly account email."),
    api_key: str = typer.Option(
        ..., "--api-key", prompt=True, hide_input=True, help="Sprint.ly API key."
    ),
    product: Optional[int] = typer.Option(None, "--product", help="Default product id."),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config."),
) -> None:
    """Create the sly config file.

    Example::

        sly setup --email me@example.com --api-key abc123 --product 42
    """
    from sly.config import config_exists, save_config
    from sly.models import SlyConfig

    if config_exists() and not force:
        warning("A config file already exists. Use --force to overwrite it.")
        raise typer.Exit(code=1)

    path = save_config(SlyConfig(email=email, api_key=api_key, product_id=product))
    success(f"Config written to {path}")
    if product is None:
        suggest("Run: sly products, then sly setup --force --product <id>")


@config_app.command("show")
def config_show() -> None:
    """Show the current configuration with the API key masked."""
    from sly.config import config_path, load_config

    config = load_config()
    data = config.model_dump(mode="json")
    if data.get("api_key"):
        data["api_key"] = data["api_key"][:4] + "..."
    info(f"Config file: {config_path()}")
    format_response(data)
