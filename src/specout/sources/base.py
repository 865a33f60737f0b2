"""Abstract base class for document sources."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar

from specout.document.parser import RawDocument
from specout.models import CommandOptions


class DocumentSource(ABC):
    """A place an OpenAPI document can be acquired from.

    Subclasses set :attr:`name` (the registry key and command name),
    build themselves from their options record via :meth:`from_options`
    and implement :meth:`acquire`.
    """

    name: ClassVar[str]

    @classmethod
    @abstractmethod
    def from_options(cls, options: CommandOptions) -> DocumentSource:
        """Build the source from a validated options record."""

    @abstractmethod
    def describe(self) -> str:
        """Identify the source in user-facing messages (``from <...>``)."""

    @abstractmethod
    async def acquire(self) -> RawDocument:
        """Fetch the raw document.

        Raises:
            SourceUnavailableError: If the source cannot produce a document.
        """
