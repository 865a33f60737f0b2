"""Canonical data shapes shared across specout modules.

**Option models** -- built once per invocation from the parsed command line
and never mutated afterwards:
    :class:`CommandOptions`, :class:`PackageOptions`, :class:`UrlOptions`.

**Document models** -- :data:`Document`, :class:`DocumentFormat`,
:class:`DocumentMetadata`.

**Configuration models** -- :class:`ExportDefaults`, persisted as JSON.

**Pipeline models** -- :class:`Stage`, :class:`Success`, :class:`Failure`
and the :data:`PipelineOutcome` union.

Option fields are deliberately loose (``format`` is a plain string, ``level``
an unconstrained int) so that inconsistent values reach
:mod:`specout.options` and are reported as
:class:`~specout.exceptions.InvalidOptionError` rather than as Pydantic
validation errors.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from specout.exceptions import ExportError


Document = dict[str, Any]
"""A parsed OpenAPI document: a mapping of string keys to JSON-like values."""


class DocumentFormat(str, enum.Enum):
    """Supported serializations for the exported document."""

    JSON = "json"
    YAML = "yaml"


# --- Options ---


class CommandOptions(BaseModel):
    """Options shared by every export command.

    Attributes:
        format: Requested serialization (``json`` or ``yaml``).
        level: Indentation width, ``0`` for compact JSON.
        out: Destination file. ``None`` writes to stdout.
        force: Allow replacing an existing ``out`` file.
        debug: Show debug diagnostics and re-raise failures unchanged.
        quiet: Suppress non-essential diagnostics.
    """

    model_config = ConfigDict(frozen=True)

    format: str = DocumentFormat.JSON.value
    level: int = 2
    out: Optional[Path] = None
    force: bool = False
    debug: bool = False
    quiet: bool = False


class PackageOptions(CommandOptions):
    """Options for exporting from a local application package."""

    package: Path
    module: str
    app_module_name: str = "default"


class UrlOptions(CommandOptions):
    """Options for exporting from a running service."""

    url: str
    timeout: float = 30.0


# --- Document metadata ---


class DocumentMetadata(BaseModel):
    """The ``info`` block handed to the document generator.

    Read from the package manifest; every field degrades to an empty string
    when the manifest or the field is missing.
    """

    model_config = ConfigDict(frozen=True)

    title: str = ""
    description: str = ""
    version: str = ""


# --- Configuration ---


class ExportDefaults(BaseModel):
    """Default option values stored in ``config.json`` or ``./specout.json``."""

    model_config = ConfigDict(extra="ignore")

    format: str = Field(default=DocumentFormat.JSON.value, description="json or yaml")
    level: int = Field(default=2, description="Indentation width")
    timeout: float = Field(default=30.0, description="HTTP timeout in seconds")


# --- Pipeline ---


class Stage(str, enum.Enum):
    """Pipeline states, in the order they are reached."""

    INIT = "init"
    OPTIONS_VALIDATED = "options_validated"
    ACQUIRED = "acquired"
    PARSED = "parsed"
    SCHEMA_VALIDATED = "schema_validated"
    FORMATTED = "formatted"
    DELIVERED = "delivered"


@dataclass(frozen=True)
class Success:
    """The document was formatted and delivered."""

    text: str


@dataclass(frozen=True)
class Failure:
    """The pipeline stopped while trying to reach ``stage``."""

    stage: Stage
    error: ExportError

    @property
    def kind(self) -> str:
        return self.error.kind

    @property
    def message(self) -> str:
        return self.error.message

    @property
    def cause(self) -> Optional[BaseException]:
        return self.error.cause


PipelineOutcome = Union[Success, Failure]
