"""Tests for specout.document.parser."""

from __future__ import annotations

import json
import textwrap
from collections import OrderedDict
from types import MappingProxyType

import pytest

from specout.document.formatter import format_document
from specout.document.parser import DECODERS, DecodeResult, parse_document
from specout.exceptions import ParseError


class TestParseDocument:

    def test_json_text(self) -> None:
        assert parse_document('{"openapi":"3.0.0"}') == {"openapi": "3.0.0"}

    def test_yaml_text(self) -> None:
        assert parse_document("openapi: 3.0.0") == {"openapi": "3.0.0"}

    def test_plain_scalar_is_rejected(self) -> None:
        with pytest.raises(ParseError, match="neither a json nor a yaml document"):
            parse_document("not a doc")

    def test_empty_text_is_rejected(self) -> None:
        with pytest.raises(ParseError):
            parse_document("")

    def test_list_is_rejected(self) -> None:
        with pytest.raises(ParseError, match="expected a mapping, got list"):
            parse_document("[1, 2, 3]")

    def test_bytes_are_decoded(self) -> None:
        raw = json.dumps({"openapi": "3.1.0", "info": {"title": "Café"}}).encode("utf-8")
        document = parse_document(raw)
        assert document["info"]["title"] == "Café"

    def test_bytes_with_bom(self) -> None:
        assert parse_document(b"\xef\xbb\xbfopenapi: 3.0.0\n") == {"openapi": "3.0.0"}

    def test_undecodable_bytes(self) -> None:
        with pytest.raises(ParseError, match="UTF-8"):
            parse_document(b"\xff\xfe\x00openapi")

    def test_mapping_is_accepted_as_is(self) -> None:
        document = {"openapi": "3.0.0", "paths": {}}
        assert parse_document(document) is document

    @pytest.mark.parametrize("raw", [OrderedDict(openapi="3.0.0"), MappingProxyType({"openapi": "3.0.0"})])
    def test_other_mappings_become_dicts(self, raw) -> None:
        document = parse_document(raw)
        assert type(document) is dict
        assert document == {"openapi": "3.0.0"}

    def test_exponent_numbers_stay_numbers(self) -> None:
        document = parse_document(
            '{"openapi": "3.0.0", "x-max": 1e+20, "x-min": -1e5, "x-small": 1.5e-3, "x-big": 2.5E10}'
        )
        assert document == {
            "openapi": "3.0.0",
            "x-max": 1e20,
            "x-min": -1e5,
            "x-small": 0.0015,
            "x-big": 2.5e10,
        }
        assert all(isinstance(document[key], float) for key in ("x-max", "x-min", "x-small", "x-big"))

    def test_exponent_numbers_in_yaml(self) -> None:
        document = parse_document("openapi: 3.0.0\nmaximum: 1e5\nversion: 1e5x\n")
        assert document == {"openapi": "3.0.0", "maximum": 100000.0, "version": "1e5x"}

    def test_exponent_numbers_survive_reformatting(self) -> None:
        document = parse_document('{"openapi": "3.0.0", "maximum": 1e+20}')
        assert format_document(document, "json", 0) == '{"openapi":"3.0.0","maximum":1e+20}'

    def test_json_with_tabs_falls_back_to_json_decoder(self) -> None:
        """YAML forbids tab indentation; the JSON decoder still accepts it."""
        text = '{\n\t"openapi": "3.0.0",\n\t"paths": {}\n}'
        assert parse_document(text) == {"openapi": "3.0.0", "paths": {}}

    def test_nested_yaml(self) -> None:
        text = textwrap.dedent("""\
            openapi: "3.0.3"
            info:
              title: YAML Test
              version: "1.0.0"
            paths:
              /cats:
                get:
                  responses:
                    "200":
                      description: ok
        """)
        document = parse_document(text)
        assert document["paths"]["/cats"]["get"]["responses"]["200"]["description"] == "ok"

    def test_error_lists_each_decoder(self) -> None:
        with pytest.raises(ParseError) as excinfo:
            parse_document("not a doc")
        assert "yaml:" in str(excinfo.value)
        assert "json:" in str(excinfo.value)


class TestDecoders:

    def test_yaml_is_tried_first(self) -> None:
        assert [name for name, _ in DECODERS] == ["yaml", "json"]

    def test_decode_result_tags(self) -> None:
        assert DecodeResult(document={}).ok
        assert not DecodeResult(mismatch="nope").ok
