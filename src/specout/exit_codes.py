"""Numeric process exit codes.

Every export failure maps to :data:`EXIT_FAILURE` so that calling scripts
only have to test for a non-zero status. Usage errors detected by the
argument parser keep Click's conventional code.

Example::

    $ specout url --url http://localhost:9/openapi.json
    $ echo $?
    1
"""

EXIT_SUCCESS = 0
"""The document was exported."""

EXIT_FAILURE = 1
"""The export pipeline failed."""

EXIT_USAGE = 2
"""The command line could not be parsed (raised by Click/Typer)."""

EXIT_INTERRUPTED = 130
"""The user pressed Ctrl-C."""
