"""Serialize a document as JSON or YAML.

Formatting is deterministic: mapping order from the input is preserved and
nothing depends on time or randomness.

* **json** -- ``level`` is the indent width; ``0`` produces compact output
  with no whitespace between tokens. Values JSON cannot represent (dates,
  for instance) are rendered with ``str``.
* **yaml** -- block style with ``level`` as the indent width. PyYAML only
  honours indents from 2 to 9, so ``0`` and ``1`` fall back to its default
  of 2. Values the safe dumper cannot represent are skipped so that a
  validated document always produces output.
"""

from __future__ import annotations

import datetime
import json
from typing import Any, Union

import yaml

from specout.models import Document, DocumentFormat

_SKIP = object()

_YAML_SCALARS = (type(None), bool, int, float, str, bytes, datetime.date)


def format_document(
    document: Document,
    serialization: Union[DocumentFormat, str],
    level: int,
) -> str:
    """Render *document* in *serialization* with an indent width of *level*."""
    if DocumentFormat(serialization) is DocumentFormat.YAML:
        return _format_yaml(document, level)
    return _format_json(document, level)


def _format_json(document: Document, level: int) -> str:
    if level == 0:
        return json.dumps(document, separators=(",", ":"), ensure_ascii=False, default=str)
    return json.dumps(document, indent=level, ensure_ascii=False, default=str)


def _format_yaml(document: Document, level: int) -> str:
    return yaml.safe_dump(
        _representable(document),
        indent=level,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def _representable(value: Any) -> Any:
    """Return a copy of *value* reduced to what ``yaml.SafeDumper`` can emit.

    Subclasses of ``str``/``int``/``float`` (string enums, for example) are
    converted to the plain type; anything else unknown becomes :data:`_SKIP`
    and is dropped by its container.
    """
    if isinstance(value, dict):
        result = {}
        for key, item in value.items():
            key = _representable(key)
            item = _representable(item)
            if key is _SKIP or item is _SKIP or isinstance(key, (dict, list)):
                continue
            result[key] = item
        return result
    if isinstance(value, (list, tuple)):
        return [item for item in map(_representable, value) if item is not _SKIP]
    if type(value) in _YAML_SCALARS or type(value) is datetime.datetime:
        return value
    if isinstance(value, str):
        return str.__str__(value)
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return float(value)
    return _SKIP
