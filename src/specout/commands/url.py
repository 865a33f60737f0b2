"""Url command -- export the document served by a running service."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from specout.commands.export import (
    DEBUG_HELP,
    FORCE_HELP,
    FORMAT_HELP,
    LEVEL_HELP,
    OUT_HELP,
    QUIET_HELP,
    install_output,
    load_defaults,
    run_export,
)
from specout.models import UrlOptions
from specout.sources.url import UrlSource


def url_command(
    url: str = typer.Option(
        ...,
        "--url",
        "-u",
        help="The url to export the OpenAPI document from, e.g. http://localhost:8000/openapi.json.",
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Seconds to wait for the service (default 30)."
    ),
    format: Optional[str] = typer.Option(None, "--format", "-f", help=FORMAT_HELP),
    level: Optional[int] = typer.Option(None, "--level", "-l", help=LEVEL_HELP),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help=OUT_HELP),
    force: bool = typer.Option(False, "--force", help=FORCE_HELP),
    debug: bool = typer.Option(False, "--debug", "-d", help=DEBUG_HELP),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
) -> None:
    """Export OpenAPI document from an url.

    The response body may be JSON or YAML.

    Example::

        specout url --url http://localhost:8000/openapi.json --format yaml
    """
    install_output(debug=debug, quiet=quiet)
    defaults = load_defaults(
        url, debug, cli_format=format, cli_level=level, cli_timeout=timeout
    )

    options = UrlOptions(
        url=url,
        timeout=defaults.timeout,
        format=defaults.format,
        level=defaults.level,
        out=out,
        force=force,
        debug=debug,
        quiet=quiet,
    )
    run_export(UrlSource.name, options)
