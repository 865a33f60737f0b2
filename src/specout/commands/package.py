"""Package command -- export the document of a local application.

Implements ``specout package``. The module is imported from the project
directory, the named export is turned into an application, and FastAPI's
generator produces the document, with ``info`` taken from the project's
``pyproject.toml``.
"""

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
from specout.models import PackageOptions
from specout.sources.package import DEFAULT_EXPORT, PackageSource, package_label


def package_command(
    package: Path = typer.Option(
        ...,
        "--package",
        "-p",
        help="The package to export the OpenAPI document from, e.g. <path-to>/some-package.",
    ),
    module: str = typer.Option(
        ...,
        "--module",
        "-m",
        help="The module holding the application, e.g. app.main or app/main.py.",
    ),
    app_module_name: str = typer.Option(
        DEFAULT_EXPORT,
        "--app-module-name",
        "-a",
        help="The application, class or factory exported by the module. "
        "'default' looks for 'default', then 'app'.",
    ),
    format: Optional[str] = typer.Option(None, "--format", "-f", help=FORMAT_HELP),
    level: Optional[int] = typer.Option(None, "--level", "-l", help=LEVEL_HELP),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help=OUT_HELP),
    force: bool = typer.Option(False, "--force", help=FORCE_HELP),
    debug: bool = typer.Option(False, "--debug", "-d", help=DEBUG_HELP),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
) -> None:
    """Export OpenAPI document from a local package.

    Example::

        specout package --package ./simple-api --module app.main
        specout package -p ./simple-api -m app/main.py -a create_app -f yaml -l 4
    """
    install_output(debug=debug, quiet=quiet)
    defaults = load_defaults(
        package_label(package, module), debug, cli_format=format, cli_level=level
    )

    options = PackageOptions(
        package=package,
        module=module,
        app_module_name=app_module_name,
        format=defaults.format,
        level=defaults.level,
        out=out,
        force=force,
        debug=debug,
        quiet=quiet,
    )
    run_export(PackageSource.name, options)
