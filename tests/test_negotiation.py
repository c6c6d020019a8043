"""Tests for peep.server.negotiation: return values to responses."""

import json

import pytest

from peep.http.response import HTML, JSON, TEXT, Response, ResponseHandle
from peep.server.negotiation import negotiate


class TestNegotiate:
    def test_response_passes_through(self) -> None:
        r = Response("x", status=201)
        assert negotiate(r) is r

    def test_str_is_html(self) -> None:
        r = negotiate("<h1>hi</h1>")
        assert r.content_type == HTML
        assert r.body == "<h1>hi</h1>"

    def test_bytes_is_octet_stream(self) -> None:
        r = negotiate(b"\x00\x01")
        assert r.content_type == "application/octet-stream"

    def test_dict_is_json(self) -> None:
        r = negotiate({"a": 1})
        assert r.content_type == JSON
        assert json.loads(r.text) == {"a": 1}

    def test_list_is_json(self) -> None:
        assert json.loads(negotiate([1, 2]).text) == [1, 2]

    def test_tuple_overrides_status(self) -> None:
        r = negotiate(("Created", 201))
        assert r.status == 201
        assert r.body == "Created"

    def test_two_item_list_is_not_a_status_pair(self) -> None:
        r = negotiate(["Created", 201])
        assert r.status == 200
        assert json.loads(r.text) == ["Created", 201]

    def test_unsupported_type(self) -> None:
        with pytest.raises(TypeError, match="Cannot convert int"):
            negotiate(42)


class TestWithHandle:
    def test_none_uses_handle(self) -> None:
        handle = ResponseHandle().set_status(403).text().render("nope")
        r = negotiate(None, handle)
        assert r.status == 403
        assert r.content_type == TEXT
        assert r.body == "nope"

    def test_none_without_handle_is_empty(self) -> None:
        r = negotiate(None)
        assert r.status == 200
        assert r.body == ""

    def test_handle_return(self) -> None:
        handle = ResponseHandle().render("x")
        assert negotiate(handle).body == "x"

    def test_plain_value_keeps_handle_status_and_headers(self) -> None:
        handle = ResponseHandle().set_status(202).set_header("X-A", "1")
        r = negotiate("accepted", handle)
        assert r.status == 202
        assert r.header("X-A") == "1"
        assert r.content_type == HTML

    def test_explicit_handle_content_type_wins(self) -> None:
        handle = ResponseHandle().text()
        assert negotiate("plain", handle).content_type == TEXT

    def test_dict_with_default_handle_is_json(self) -> None:
        assert negotiate({"a": 1}, ResponseHandle()).content_type == JSON
