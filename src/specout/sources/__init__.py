"""Document sources and the registry that maps source names to them.

* :class:`~specout.sources.package.PackageSource` -- import an application
  from a local project directory and generate its document.
* :class:`~specout.sources.url.UrlSource` -- fetch the document from a
  running service over HTTP.
"""

from __future__ import annotations

from specout.exceptions import InvalidOptionError
from specout.models import CommandOptions
from specout.sources.base import DocumentSource
from specout.sources.package import PackageSource
from specout.sources.url import UrlSource

SOURCES: dict[str, type[DocumentSource]] = {
    PackageSource.name: PackageSource,
    UrlSource.name: UrlSource,
}


def create_source(name: str, options: CommandOptions) -> DocumentSource:
    """Instantiate the source registered under *name*.

    Raises:
        InvalidOptionError: If no source is registered under *name*.
    """
    try:
        source_cls = SOURCES[name]
    except KeyError:
        raise InvalidOptionError(
            f"unknown source {name!r}, expected one of {', '.join(sorted(SOURCES))}"
        ) from None
    return source_cls.from_options(options)


__all__ = ["DocumentSource", "PackageSource", "UrlSource", "SOURCES", "create_source"]
