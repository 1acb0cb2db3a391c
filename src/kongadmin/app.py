"""Typer application and CLI entry point for kongadmin.

This module wires together the top-level Typer application and registers
the ``plugins`` and ``config`` sub-command groups. Global options chosen on
the root callback (profile, base URL, output format, dry-run, ...) are stored
in ``ctx.obj`` for the sub-commands to read.

:func:`main` is the console-script entry point declared in
``pyproject.toml``.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Optional

import typer
from rich.logging import RichHandler

from kongadmin import __version__
from kongadmin.commands.config import config_app
from kongadmin.commands.plugins import plugins_app
from kongadmin.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="kongadmin",
    help="Manage Kong gateway plugins through the Admin API.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(plugins_app, name="plugins", help="Create, inspect and remove plugins.")
app.add_typer(config_app, name="config", help="Connection profile management.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"kongadmin {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    """Route library log records through Rich on stderr; DEBUG only with ``--verbose``."""
    logger = logging.getLogger("kongadmin")
    logger.handlers.clear()
    handler = RichHandler(show_path=False, rich_tracebacks=False)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="Profile name to use."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Admin API base URL (overrides the profile)."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-n", help="Print requests instead of sending them."
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmations."),
) -> None:
    """Initialise output and logging, and store shared options in ``ctx.obj``."""
    from kongadmin.output import OutputFormat, OutputManager, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet))
    _configure_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj["profile"] = profile
    ctx.obj["base_url"] = base_url
    ctx.obj["dry_run"] = dry_run
    ctx.obj["force"] = force


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``kongadmin`` console script.

    :class:`~kongadmin.exceptions.KongAdminError` instances that escape a
    command cause a clean exit with the error's ``exit_code``.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except Exception as exc:
        from kongadmin.exceptions import KongAdminError
        from kongadmin.output import error

        if isinstance(exc, KongAdminError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
