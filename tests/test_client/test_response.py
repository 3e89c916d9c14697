"""Tests for response body parsing into JSON envelopes."""

from __future__ import annotations

import pytest

from datamanager.client.response import parse_envelope
from datamanager.exceptions import BadResponseError, InvalidFormatError, InvalidJSONError
from datamanager.models import JSONArray, JSONObject
from datamanager.outcome import Failure, Success


class TestEnvelopes:
    def test_object(self) -> None:
        assert parse_envelope(b'{"id": 1}') == Success(JSONObject(value={"id": 1}))

    def test_array(self) -> None:
        assert parse_envelope(b'[1, "two", null]') == Success(JSONArray(value=[1, "two", None]))

    def test_empty_object_and_array(self) -> None:
        assert parse_envelope(b"{}") == Success(JSONObject(value={}))
        assert parse_envelope(b"[]") == Success(JSONArray(value=[]))

    def test_nested_values_preserved(self) -> None:
        outcome = parse_envelope(b'{"items": [{"a": [1, 2]}], "next": null}')
        assert outcome.get().value == {"items": [{"a": [1, 2]}], "next": None}

    def test_utf8_body(self) -> None:
        outcome = parse_envelope('{"name": "김정민"}'.encode("utf-8"))
        assert outcome.get().value["name"] == "김정민"


class TestFailures:
    @pytest.mark.parametrize("content", [b"", None])
    def test_empty_body_is_bad_response(self, content: bytes | None) -> None:
        outcome = parse_envelope(content)
        assert isinstance(outcome, Failure)
        assert isinstance(outcome.error, BadResponseError)

    @pytest.mark.parametrize("content", [b"not json", b"{'single': 'quotes'}", b"<html></html>", b"\x80\x81"])
    def test_malformed_is_invalid_json(self, content: bytes) -> None:
        outcome = parse_envelope(content)
        assert isinstance(outcome, Failure)
        assert isinstance(outcome.error, InvalidJSONError)
        assert outcome.error.code == "invalid_json"

    @pytest.mark.parametrize("content", [b"5", b'"5"', b"true", b"null", b"3.14"])
    def test_scalar_is_invalid_format(self, content: bytes) -> None:
        outcome = parse_envelope(content)
        assert isinstance(outcome, Failure)
        assert isinstance(outcome.error, InvalidFormatError)
        assert outcome.error.code == "invalid_format"
