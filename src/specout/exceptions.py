"""Exception hierarchy for specout.

All exceptions inherit from :class:`ExportError`, which carries an
``exit_code`` attribute taken from :mod:`specout.exit_codes` and a short
``kind`` label naming the failure category. Pipeline stages raise these
exceptions (chaining the underlying error with ``raise ... from exc``) and
the command layer decides what the user sees.

Subclass hierarchy::

    ExportError (exit 1)
    +-- InvalidOptionError
    +-- SourceUnavailableError
    +-- ParseError
    +-- SchemaValidationError
    +-- OutputError
    +-- ConfigError
"""

from __future__ import annotations

from specout.exit_codes import EXIT_FAILURE


class ExportError(Exception):
    """Base exception for all specout errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_FAILURE
    kind: str = "export_error"

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code

    @property
    def message(self) -> str:
        """The error text without the exception class name."""
        return str(self)

    @property
    def cause(self) -> BaseException | None:
        """The chained exception that triggered this error, if any."""
        return self.__cause__


class InvalidOptionError(ExportError):
    """Raised when the command options are inconsistent (bad format, level, path)."""

    kind = "invalid_option"


class SourceUnavailableError(ExportError):
    """Raised when a package or URL could not produce a document."""

    kind = "source_unavailable"


class ParseError(ExportError):
    """Raised when raw input is neither JSON nor YAML."""

    kind = "parse_error"


class SchemaValidationError(ExportError):
    """Raised when a parsed document is not an OpenAPI document."""

    kind = "schema_validation"


class OutputError(ExportError):
    """Raised when the formatted document cannot be written to its destination."""

    kind = "output_error"


class ConfigError(ExportError):
    """Raised for unreadable or invalid configuration files."""

    kind = "config_error"
