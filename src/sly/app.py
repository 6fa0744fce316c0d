"""Typer application and CLI entry point for sly.

:func:`main` is the ``sly`` console script declared in ``pyproject.toml``.
It installs a SIGINT handler, runs the Typer app, turns
:class:`~sly.exceptions.SlyError` into a clean message plus the error's
exit code, and writes a crash log for anything unexpected.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from sly import __version__
from sly.commands.browse import item_command, items_command, people_command, products_command
from sly.commands.cache import cache_app
from sly.commands.config import config_app, setup_command
from sly.commands.edit import add_command, update_command
from sly.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="sly",
    help="Work with Sprint.ly products, people and items from the terminal.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("products")(products_command)
app.command("people")(people_command)
app.command("items")(items_command)
app.command("item")(item_command)
app.command("add")(add_command)
app.command("update")(update_command)
app.command("setup")(setup_command)
app.add_typer(config_app, name="config", help="Configuration management.")
app.add_typer(cache_app, name="cache", help="Response cache management.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"sly {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Install the global :class:`~sly.output.OutputManager` from the CLI flags.

    Without ``--json`` or ``--plain`` the format comes from the config
    file's ``output.format``.
    """
    from sly.output import OutputFormat, OutputManager, set_output

    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN
    else:
        fmt = _configured_format()

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))


def _configured_format() -> OutputFormat:
    """Return the config's output format, or ``AUTO`` when it cannot be loaded.

    A missing or invalid config is reported by the command that needs it.
    """
    from sly.config import load_config
    from sly.exceptions import ConfigError
    from sly.output import OutputFormat

    try:
        return load_config().output.format
    except ConfigError:
        return OutputFormat.AUTO


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write the current traceback under the data directory and return its path."""
    from sly.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``sly`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from sly.exceptions import SlyError
        from sly.output import error

        if isinstance(exc, SlyError):
            error(str(exc))
            sys.exit(exc.exit_code)
        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_GENERIC_FAILURE)
