"""Shallow structural check for OpenAPI documents.

This is not a schema validator: a document is accepted as soon as it carries
the top-level ``openapi`` key, whatever else it contains.
"""

from __future__ import annotations

from specout.exceptions import SchemaValidationError
from specout.models import Document

MARKER_KEY = "openapi"


def check_document(document: Document) -> Document:
    """Return *document* unchanged if it has the ``openapi`` marker.

    Raises:
        SchemaValidationError: If the marker key is missing.
    """
    if MARKER_KEY not in document:
        raise SchemaValidationError("not an OpenAPI document")
    return document
