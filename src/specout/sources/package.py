"""Acquire a document from a local application package.

The package is a project directory containing an ASGI application (FastAPI,
or anything exposing ``routes`` the same way). The module is imported with
the package directory at the front of ``sys.path``, the named export is
turned into an application, and the application routes are handed to the
document generator together with metadata from the package manifest.

Import and construction run user code and may block, so they happen in a
worker thread.
"""

from __future__ import annotations

import asyncio
import importlib
import sys
from pathlib import Path
from types import ModuleType
from typing import Any

from specout.exceptions import SourceUnavailableError
from specout.models import CommandOptions, Document, PackageOptions
from specout.options import module_dotted_name
from specout.output import debug
from specout.sources.base import DocumentSource
from specout.sources.generator import generate_document, has_routes, read_metadata

DEFAULT_EXPORT = "default"
"""Export name meaning "the module's conventional application object"."""

_DEFAULT_EXPORT_NAMES = ("default", "app")


class PackageSource(DocumentSource):
    """Generate the document of an application found in a local package.

    Args:
        package: The project directory.
        module: Module holding the application, as ``app.main`` or
            ``app/main.py`` (relative to *package*).
        app_module_name: Name of the exported application, class or factory.
            ``"default"`` looks for ``default`` and then ``app``.
    """

    name = "package"

    def __init__(self, package: Path, module: str, app_module_name: str = DEFAULT_EXPORT) -> None:
        self._package = Path(package)
        self._module = module
        self._app_module_name = app_module_name

    @classmethod
    def from_options(cls, options: CommandOptions) -> PackageSource:
        assert isinstance(options, PackageOptions)
        return cls(options.package, options.module, options.app_module_name)

    def describe(self) -> str:
        return package_label(self._package, self._module)

    async def acquire(self) -> Document:
        return await asyncio.to_thread(self._generate)

    # ------------------------------------------------------------------ #
    # Steps (run in a worker thread)
    # ------------------------------------------------------------------ #

    def _generate(self) -> Document:
        module = self._import_module()
        app = self._construct_app(self._resolve_export(module))
        metadata = read_metadata(self._package)
        debug(f"Generating document with info {metadata.model_dump()}")
        try:
            return generate_document(app, metadata)
        except Exception as exc:
            raise SourceUnavailableError(
                f"failed to generate the document for {self._app_module_name}: {exc}"
            ) from exc

    def _import_module(self) -> ModuleType:
        package_dir = self._package.resolve()
        dotted = module_dotted_name(self._module)
        debug(f"Importing {dotted} from {package_dir}")

        _forget_foreign_modules(dotted.split(".")[0], package_dir)
        importlib.invalidate_caches()
        sys.path.insert(0, str(package_dir))
        try:
            module = importlib.import_module(dotted)
        except Exception as exc:
            raise SourceUnavailableError(
                f"cannot import module {self._module} from {self._package}: {exc}"
            ) from exc
        finally:
            try:
                sys.path.remove(str(package_dir))
            except ValueError:
                pass

        if not _is_inside(module, package_dir):
            raise SourceUnavailableError(
                f"module {dotted} resolved to {getattr(module, '__file__', None)}, "
                f"outside of {self._package}"
            )
        return module

    def _resolve_export(self, module: ModuleType) -> Any:
        if self._app_module_name == DEFAULT_EXPORT:
            candidates: tuple[str, ...] = _DEFAULT_EXPORT_NAMES
        else:
            candidates = (self._app_module_name,)
        for candidate in candidates:
            if hasattr(module, candidate):
                debug(f"Using export {module.__name__}.{candidate}")
                return getattr(module, candidate)
        raise SourceUnavailableError(
            f"module {self._module} has no export named {self._app_module_name}"
        )

    def _construct_app(self, export: Any) -> Any:
        if has_routes(export):
            return export
        if not callable(export):
            raise SourceUnavailableError(
                f"{self._app_module_name} is neither an application nor an application factory"
            )
        try:
            app = export()
        except Exception as exc:
            raise SourceUnavailableError(
                f"failed to create the application from {self._app_module_name}: {exc}"
            ) from exc
        if not has_routes(app):
            raise SourceUnavailableError(
                f"{self._app_module_name}() returned {type(app).__name__}, not an application"
            )
        return app


def package_label(package: Path | str, module: str) -> str:
    """Identify a package source in messages: ``<package> and module <module>``."""
    return f"{package} and module {module}"


def _module_file(module: ModuleType) -> Path | None:
    location = getattr(module, "__file__", None)
    return Path(location).resolve() if location else None


def _is_inside(module: ModuleType, directory: Path) -> bool:
    location = _module_file(module)
    return location is not None and location.is_relative_to(directory)


def _forget_foreign_modules(top_level: str, package_dir: Path) -> None:
    """Drop cached modules named like *top_level* that live outside *package_dir*.

    Without this, a second package using the same module names (``app.main``)
    would get the first package's modules back from ``sys.modules``.
    """
    for name in list(sys.modules):
        if name != top_level and not name.startswith(top_level + "."):
            continue
        module = sys.modules[name]
        location = _module_file(module)
        if location is not None and not location.is_relative_to(package_dir):
            del sys.modules[name]
