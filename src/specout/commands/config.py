"""Config commands -- inspect the option defaults.

Defaults for ``--format``, ``--level`` and ``--timeout`` can be stored in the
global ``config.json``, a project-local ``specout.json`` or ``SPECOUT_*``
environment variables. ``specout config show`` prints the values that would
apply right now and the layer each one came from.
"""

from __future__ import annotations

import json

import typer

from specout.output import error, info, print_document


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show() -> None:
    """Show the effective option defaults.

    Example::

        specout config show
    """
    from specout.config import global_config_path, project_config_path, resolve_defaults
    from specout.exceptions import ConfigError

    try:
        defaults, sources = resolve_defaults()
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    info(f"Global config: {global_config_path()}")
    info(f"Project config: {project_config_path()}")
    data = {
        "defaults": defaults.model_dump(mode="json"),
        "sources": sources,
    }
    print_document(json.dumps(data, indent=2))
