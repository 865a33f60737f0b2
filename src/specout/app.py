"""Typer application and CLI entry point for specout.

This module builds the top-level Typer application and registers the
``package``, ``url`` and ``config`` sub-commands.

:func:`main` is the console-script entry point declared in
``pyproject.toml``. Export failures are handled by the commands themselves;
with ``--debug`` they propagate unchanged. Any other unhandled exception is
written to a crash log under the data directory.

See Also:
    :mod:`specout.commands.export`: How export failures are reported.
    :mod:`specout.config`: Defaults resolution and the data directory.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any

import typer

from specout import __version__
from specout.commands.config import config_app
from specout.commands.package import package_command
from specout.commands.url import url_command
from specout.exit_codes import EXIT_FAILURE, EXIT_INTERRUPTED


app = typer.Typer(
    name="specout",
    help="Export OpenAPI documents from local packages or running services.",
    no_args_is_help=True,
    add_completion=False,
)

app.command("package")(package_command)
app.command("url")(url_command)
app.add_typer(config_app, name="config", help="Show option defaults.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specout {__version__}")
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
) -> None:
    """Export OpenAPI documents as JSON or YAML."""


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from specout.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text("".join(traceback.format_exception(exc)))
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``specout`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
        ExportError: When an export fails with ``--debug``.
    """
    from specout.exceptions import ExportError

    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_INTERRUPTED)
    except ExportError:
        raise
    except Exception as exc:
        from specout.output import error

        log_path = _write_crash_log(exc)
        error(f"Unexpected error. Debug log: {log_path}")
        sys.exit(EXIT_FAILURE)
