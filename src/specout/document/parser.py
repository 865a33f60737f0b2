"""Turn raw document input into a :data:`~specout.models.Document`.

A package source hands over an already-structured mapping, which is accepted
as is. A URL source hands over the response body, whose serialization is not
known in advance, so the text is run through an ordered list of decoders
(YAML first, then JSON). Each decoder returns a tagged
:class:`DecodeResult`; the first successful one wins.

A decode that succeeds but does not produce a mapping (``"not a doc"`` is a
perfectly valid YAML scalar) counts as a mismatch, not as a document.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

import yaml

from specout.exceptions import ParseError
from specout.models import Document

RawDocument = Union[bytes, str, Mapping[str, Any]]


class _DocumentLoader(yaml.SafeLoader):
    """SafeLoader that also reads JSON numbers such as ``1e5`` and ``1e+20`` as floats.

    YAML 1.1 requires a dot and a signed exponent, so plain ``safe_load`` keeps
    those as strings.
    """


_DocumentLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(r"^[-+]?[0-9][0-9_]*(?:\.[0-9_]*)?[eE][-+]?[0-9]+$"),
    list("-+0123456789"),
)


@dataclass(frozen=True)
class DecodeResult:
    """Outcome of one decoder attempt: a document, or why it did not match."""

    document: Optional[Document] = None
    mismatch: str = ""

    @property
    def ok(self) -> bool:
        return self.document is not None


def _as_document(value: Any) -> DecodeResult:
    if isinstance(value, dict):
        return DecodeResult(document=value)
    kind = "empty document" if value is None else type(value).__name__
    return DecodeResult(mismatch=f"expected a mapping, got {kind}")


def _decode_yaml(text: str) -> DecodeResult:
    try:
        return _as_document(yaml.load(text, Loader=_DocumentLoader))
    except yaml.YAMLError as exc:
        return DecodeResult(mismatch=str(exc))


def _decode_json(text: str) -> DecodeResult:
    try:
        return _as_document(json.loads(text))
    except json.JSONDecodeError as exc:
        return DecodeResult(mismatch=str(exc))


DECODERS: tuple[tuple[str, Callable[[str], DecodeResult]], ...] = (
    ("yaml", _decode_yaml),
    ("json", _decode_json),
)


def parse_document(raw: RawDocument) -> Document:
    """Parse *raw* into a document.

    Args:
        raw: A mapping (a plain ``dict`` is returned unchanged), or the body of an HTTP response
            as ``bytes`` or ``str``.

    Returns:
        The parsed document.

    Raises:
        ParseError: If the bytes are not UTF-8, or the text is neither a
            YAML nor a JSON mapping.
    """
    if isinstance(raw, Mapping):
        return raw if type(raw) is dict else dict(raw)

    if isinstance(raw, bytes):
        try:
            text = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"the document is not valid UTF-8: {exc}") from exc
    else:
        text = raw

    mismatches: list[str] = []
    for name, decode in DECODERS:
        result = decode(text)
        if result.ok:
            return result.document  # type: ignore[return-value]
        mismatches.append(f"{name}: {result.mismatch}")

    msg = "the document is neither a json nor a yaml document"
    for detail in mismatches:
        msg += f"\n  {detail}"
    raise ParseError(msg)
