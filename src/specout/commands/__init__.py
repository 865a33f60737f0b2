"""Built-in CLI sub-commands for specout.

* :mod:`~specout.commands.package` -- export the document of an application
  found in a local project directory.
* :mod:`~specout.commands.url` -- export the document served by a running
  service.
* :mod:`~specout.commands.config` -- show the effective option defaults.
* :mod:`~specout.commands.export` -- plumbing shared by the export commands:
  output setup, defaults resolution, running the pipeline and turning a
  failure into stderr output and an exit code.

Export commands are plain callback functions registered directly on the
root app; ``config`` is a :class:`typer.Typer` sub-application.
"""
