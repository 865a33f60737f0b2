"""Plumbing shared by the ``package`` and ``url`` commands.

Failures are reported in two steps: a one-line context message naming the
source being exported, then either the exception itself (``--debug``, the
error propagates out of the command unchanged) or its message followed by
exit code 1.
"""

from __future__ import annotations

import asyncio
from typing import NoReturn, Optional

import typer

from specout.config import resolve_defaults
from specout.exceptions import ConfigError, ExportError
from specout.models import CommandOptions, ExportDefaults, Failure, PipelineOutcome
from specout.output import OutputManager, error, message, set_output
from specout.pipeline import CommandPipeline
from specout.sources import create_source

FORMAT_HELP = "The output format: json or yaml."
LEVEL_HELP = "The indentation level (0-8, 0 means compact json)."
OUT_HELP = "The output path, defaults to stdout ('-')."
FORCE_HELP = "Overwrite the output file if it exists."
DEBUG_HELP = "Write debug information to stderr and re-raise errors."
QUIET_HELP = "Suppress non-essential output."


def install_output(debug: bool, quiet: bool) -> None:
    """Install the global output manager for this invocation."""
    set_output(OutputManager(quiet=quiet, verbose=debug))


def load_defaults(
    source_label: str,
    debug: bool,
    cli_format: Optional[str] = None,
    cli_level: Optional[int] = None,
    cli_timeout: Optional[float] = None,
) -> ExportDefaults:
    """Resolve option defaults, reporting config problems like any other failure."""
    try:
        defaults, _ = resolve_defaults(cli_format, cli_level, cli_timeout)
    except ConfigError as exc:
        report_failure(exc, source_label, debug)
    return defaults


def report_failure(exc: ExportError, source_label: str, debug: bool) -> NoReturn:
    """Tell the user the export from *source_label* failed, then stop.

    Raises:
        ExportError: *exc* itself when *debug* is set.
        typer.Exit: With the error's exit code otherwise.
    """
    message(f"an error occurred when trying to export the document from {source_label}")
    if debug:
        raise exc
    error(exc.message)
    raise typer.Exit(code=exc.exit_code)


def run_export(source_name: str, options: CommandOptions) -> PipelineOutcome:
    """Run the pipeline for the source registered as *source_name*."""
    source = create_source(source_name, options)
    outcome = asyncio.run(CommandPipeline(options, source).run())
    if isinstance(outcome, Failure):
        report_failure(outcome.error, source.describe(), options.debug)
    return outcome
