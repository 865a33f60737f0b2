"""Document handling -- parse raw input, check it, and serialize it again.

Sub-modules:

* :mod:`~specout.document.parser` -- raw bytes/text/mapping to a
  :data:`~specout.models.Document`, trying YAML then JSON.
* :mod:`~specout.document.validator` -- shallow check for the top-level
  ``openapi`` marker.
* :mod:`~specout.document.formatter` -- JSON or YAML text with a given
  indentation width.
"""

from specout.document.formatter import format_document
from specout.document.parser import parse_document
from specout.document.validator import check_document

__all__ = ["parse_document", "check_document", "format_document"]
