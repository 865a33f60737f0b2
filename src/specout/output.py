"""Output system with strict stdout/stderr discipline.

* **stdout** -- the exported document only, so that it can be piped or
  redirected into a file.
* **stderr** -- every diagnostic: errors, warnings, debug lines.
* **Colour control** -- respects ``NO_COLOR`` and ``TERM=dumb``.

The module exposes two layers:

1. :class:`OutputManager` -- holds the Rich stderr console and the
   quiet/verbose flags. Created by each command from its options and
   installed via :func:`set_output`.
2. Module-level convenience functions (:func:`error`, :func:`debug`, ...)
   that delegate to the global ``OutputManager``.
"""

from __future__ import annotations

import os
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape


class OutputManager:
    """Central manager for CLI output.

    Args:
        no_color: Disable all colour and Rich markup.
        quiet: Suppress informational messages on stderr.
        verbose: Enable debug messages on stderr (``--debug``).
    """

    def __init__(
        self,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        self._stderr = Console(
            file=sys.stderr,
            no_color=self._no_color,
            stderr=True,
        )

    @property
    def is_quiet(self) -> bool:
        """Whether quiet mode is enabled."""
        return self._quiet

    @property
    def is_verbose(self) -> bool:
        """Whether debug messages are shown."""
        return self._verbose

    # ------------------------------------------------------------------ #
    # Data output (stdout)
    # ------------------------------------------------------------------ #

    def print_document(self, text: str) -> None:
        """Write the exported document to stdout.

        The text is written verbatim (no markup processing); a trailing
        newline is appended if missing.
        """
        sys.stdout.write(text)
        if not text.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def message(self, text: str) -> None:
        """Print a plain line to stderr. Never suppressed."""
        self._emit(text, escape(text))

    def info(self, text: str) -> None:
        """Print an informational message to stderr. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._emit(text, escape(text))

    def warning(self, text: str) -> None:
        """Print a yellow warning to stderr. NOT suppressed by ``--quiet``."""
        self._emit(f"Warning: {text}", f"[yellow]Warning:[/yellow] {escape(text)}")

    def error(self, text: str) -> None:
        """Print a bold-red error to stderr. Never suppressed."""
        self._emit(f"Error: {text}", f"[bold red]Error:[/bold red] {escape(text)}")

    def debug(self, text: str) -> None:
        """Print a debug message to stderr. Only shown with ``--debug``."""
        if self._verbose:
            self._emit(f"[debug] {text}", f"[dim]\\[debug] {escape(text)}[/dim]")

    def _emit(self, plain: str, rich_text: str) -> None:
        if self._no_color:
            print(plain, file=sys.stderr, flush=True)
        else:
            self._stderr.print(rich_text, soft_wrap=True)


# ------------------------------------------------------------------ #
# Module-level helpers
# ------------------------------------------------------------------ #


def _should_disable_color() -> bool:
    """Return True when NO_COLOR is set (any value) or TERM=dumb."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    if os.environ.get("TERM") == "dumb":
        return True
    return False


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    """Install *output* as the global :class:`OutputManager` instance."""
    global _output
    _output = output


def reset_output() -> None:
    """Reset the global :class:`OutputManager` to ``None``.

    Primarily useful in test suites: the manager keeps a reference to the
    ``sys.stderr`` object that was current when it was created.
    """
    global _output
    _output = None


def print_document(text: str) -> None:
    """Write the document to stdout via the global OutputManager."""
    get_output().print_document(text)


def message(text: str) -> None:
    """Print a plain line to stderr via the global OutputManager."""
    get_output().message(text)


def info(text: str) -> None:
    """Print info message to stderr via the global OutputManager."""
    get_output().info(text)


def warning(text: str) -> None:
    """Print warning to stderr via the global OutputManager."""
    get_output().warning(text)


def error(text: str) -> None:
    """Print error to stderr via the global OutputManager."""
    get_output().error(text)


def debug(text: str) -> None:
    """Print debug message to stderr via the global OutputManager."""
    get_output().debug(text)
