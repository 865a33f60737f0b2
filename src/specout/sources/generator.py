"""Document generation for application packages.

Two concerns live here:

* :func:`read_metadata` -- build the ``{title, description, version}``
  record from the package manifest (``pyproject.toml``). A missing or
  unreadable manifest degrades to blank fields, it never fails the export.
* :func:`generate_document` -- hand the application routes and the metadata
  to FastAPI's OpenAPI generator and return the raw document.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from fastapi.openapi.utils import get_openapi

from specout.models import Document, DocumentMetadata
from specout.output import debug, warning

MANIFEST_FILENAME = "pyproject.toml"


def read_metadata(package: Path) -> DocumentMetadata:
    """Read title, description and version from ``<package>/pyproject.toml``.

    The ``[project]`` table is preferred, ``[tool.poetry]`` is used when
    there is no ``[project]`` table. Absent fields become empty strings.
    """
    manifest = package / MANIFEST_FILENAME
    if not manifest.is_file():
        debug(f"No manifest at {manifest}, document info will be blank")
        return DocumentMetadata()

    try:
        data = tomllib.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        warning(f"Ignoring unreadable manifest {manifest}: {exc}")
        return DocumentMetadata()

    table = data.get("project")
    if not isinstance(table, dict):
        tool = data.get("tool")
        table = tool.get("poetry") if isinstance(tool, dict) else None
    if not isinstance(table, dict):
        return DocumentMetadata()

    return DocumentMetadata(
        title=_text(table.get("name")),
        description=_text(table.get("description")),
        version=_text(table.get("version")),
    )


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def has_routes(obj: Any) -> bool:
    """Return True if *obj* looks like a constructed ASGI application."""
    return isinstance(getattr(obj, "routes", None), list)


def generate_document(app: Any, metadata: DocumentMetadata) -> Document:
    """Generate the OpenAPI document for *app*, paths included.

    The ``info`` block comes from *metadata*; the OpenAPI version, tags and
    servers declared on the application are kept when present.
    """
    return get_openapi(
        title=metadata.title,
        version=metadata.version,
        description=metadata.description or None,
        openapi_version=getattr(app, "openapi_version", None) or "3.1.0",
        tags=getattr(app, "openapi_tags", None),
        servers=getattr(app, "servers", None) or None,
        routes=app.routes,
    )
