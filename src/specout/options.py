"""Option validators run before any I/O.

Each export command owns one validator. Subclasses extend
:meth:`OptionsValidator.validate` by calling ``super().validate()`` first, so
a generic option error (bad format, bad level, output clash) is always
reported before a source-specific one.
"""

from __future__ import annotations

import keyword
from pathlib import PurePosixPath
from urllib.parse import urlsplit

from specout.exceptions import InvalidOptionError
from specout.models import CommandOptions, DocumentFormat, PackageOptions, UrlOptions

MIN_LEVEL = 0
MAX_LEVEL = 8

_FORMATS = tuple(f.value for f in DocumentFormat)


def _is_identifier(name: str) -> bool:
    return name.isidentifier() and not keyword.iskeyword(name)


class OptionsValidator:
    """Validate the options shared by every export command."""

    def validate(self, options: CommandOptions) -> None:
        """Check *options* for internal consistency.

        Raises:
            InvalidOptionError: On the first inconsistency found.
        """
        if options.format not in _FORMATS:
            raise InvalidOptionError(
                f"format must be one of {'|'.join(_FORMATS)}, got {options.format}"
            )
        if not MIN_LEVEL <= options.level <= MAX_LEVEL:
            raise InvalidOptionError(
                f"level must be {MIN_LEVEL} <= level <= {MAX_LEVEL}, got {options.level}"
            )
        if options.out is not None and str(options.out) != "-":
            if options.out.is_dir():
                raise InvalidOptionError(f"{options.out} is a directory")
            if options.out.exists() and not options.force:
                raise InvalidOptionError(
                    f"{options.out} already exists, use --force to overwrite"
                )


class PackageOptionsValidator(OptionsValidator):
    """Validate the package directory, module path and export name."""

    def validate(self, options: PackageOptions) -> None:  # type: ignore[override]
        super().validate(options)

        if not options.package.is_dir():
            raise InvalidOptionError(f"package must be a directory, got {options.package}")

        module_parts = module_path_parts(options.module)
        if not module_parts or not all(_is_identifier(p) for p in module_parts):
            raise InvalidOptionError(
                "module must be a dotted module path (app.main) or a relative "
                f"python file (app/main.py), got {options.module}"
            )

        if not _is_identifier(options.app_module_name):
            raise InvalidOptionError(
                f"app module name must be a python identifier, got {options.app_module_name}"
            )


class UrlOptionsValidator(OptionsValidator):
    """Validate the URL and request timeout."""

    def validate(self, options: UrlOptions) -> None:  # type: ignore[override]
        super().validate(options)

        parts = urlsplit(options.url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise InvalidOptionError(f"url must be an absolute http(s) url, got {options.url}")

        if options.timeout <= 0:
            raise InvalidOptionError(f"timeout must be > 0, got {options.timeout}")


def module_path_parts(module: str) -> list[str]:
    """Split a module given as ``app.main`` or ``app/main.py`` into its segments.

    Returns an empty list for absolute paths and paths that climb out of the
    package (``..``), which are never valid.
    """
    if "/" in module or "\\" in module or module.endswith(".py"):
        path = PurePosixPath(module.replace("\\", "/"))
        if path.is_absolute() or ".." in path.parts:
            return []
        if path.suffix == ".py":
            path = path.with_suffix("")
        parts = [p for p in path.parts if p != "."]
        if parts and parts[-1] == "__init__":
            parts = parts[:-1]
        return parts
    return module.split(".")


def module_dotted_name(module: str) -> str:
    """Return the importable dotted name for *module* (see :func:`module_path_parts`)."""
    return ".".join(module_path_parts(module))


def validator_for(options: CommandOptions) -> OptionsValidator:
    """Return the validator matching the concrete options type."""
    if isinstance(options, PackageOptions):
        return PackageOptionsValidator()
    if isinstance(options, UrlOptions):
        return UrlOptionsValidator()
    return OptionsValidator()

