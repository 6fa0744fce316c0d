"""Cache commands -- inspect or empty the response cache.

Cached listings never expire on their own; ``sly cache clear`` is how a
user forces the next listing to hit the API again.
"""

from __future__ import annotations

import typer

from sly.output import format_response, success


cache_app = typer.Typer(no_args_is_help=True)


def _response_cache():  # noqa: ANN202
    from sly.cache import ResponseCache
    from sly.config import get_cache_dir, load_config, resolve_cache_dir
    from sly.exceptions import ConfigMissingError

    try:
        directory = resolve_cache_dir(load_config())
    except ConfigMissingError:
        directory = get_cache_dir()
    return ResponseCache(directory)


@cache_app.command("clear")
def cache_clear() -> None:
    """Delete every cached response."""
    removed = _response_cache().clear()
    success(f"Removed {removed} cached response(s).")


@cache_app.command("stats")
def cache_stats() -> None:
    """Show the cache directory and the cached keys."""
    format_response(_response_cache().stats())
