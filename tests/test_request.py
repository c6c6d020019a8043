"""Tests for peep.http.request: metadata, body reading, body parameters."""

from typing import Any

import pytest

from peep.errors import PayloadTooLarge
from peep.http.headers import Headers
from peep.http.params import Params
from peep.http.request import Request


def _receiver(*chunks: bytes):
    """ASGI receive() that delivers *chunks* then disconnects."""
    pending = list(chunks) or [b""]

    async def receive() -> dict[str, Any]:
        if pending:
            body = pending.pop(0)
            return {"type": "http.request", "body": body, "more_body": bool(pending)}
        return {"type": "http.disconnect"}

    return receive


def _request(
    *chunks: bytes,
    method: str = "POST",
    headers: list[tuple[bytes, bytes]] | None = None,
    query: bytes = b"",
    max_body: int | None = None,
) -> Request:
    scope = {
        "type": "http",
        "method": method,
        "path": "/submit",
        "query_string": query,
        "headers": headers or [],
        "server": ("testserver", 80),
        "client": ("127.0.0.1", 5000),
    }
    return Request.from_asgi(scope, _receiver(*chunks), max_body=max_body)


class TestMetadata:
    def test_from_asgi(self) -> None:
        req = _request(query=b"a=1&a=2&b=", headers=[(b"content-type", b"text/plain")])
        assert req.method == "POST"
        assert req.path == "/submit"
        assert req.query["a"] == "1"
        assert req.query.get_list("a") == ["1", "2"]
        assert req.query["b"] == ""
        assert req.content_type == "text/plain"
        assert req.server == ("testserver", 80)
        assert req.client == ("127.0.0.1", 5000)
        assert req.http_version == "1.1"

    def test_headers_case_insensitive(self) -> None:
        req = _request(headers=[(b"X-Requested-With", b"XMLHttpRequest")])
        assert req.headers["x-requested-with"] == "XMLHttpRequest"
        assert req.is_ajax

    def test_is_json(self) -> None:
        assert _request(headers=[(b"content-type", b"application/json")]).is_json
        assert not _request().is_json


class TestBody:
    async def test_joins_chunks(self) -> None:
        req = _request(b"hel", b"lo")
        assert await req.body() == b"hello"

    async def test_cached(self) -> None:
        req = _request(b"once")
        assert await req.body() == b"once"
        assert await req.body() == b"once"

    async def test_text_and_json(self) -> None:
        assert await _request(b"caf\xc3\xa9").text() == "café"
        assert await _request(b'{"a": 1}').json() == {"a": 1}

    async def test_limit(self) -> None:
        req = _request(b"12345", b"67890", max_body=8)
        with pytest.raises(PayloadTooLarge) as exc_info:
            await req.body()
        assert exc_info.value.status == 413

    async def test_limit_exact_size_ok(self) -> None:
        assert await _request(b"1234", max_body=4).body() == b"1234"


class TestBodyParams:
    async def test_form(self) -> None:
        req = _request(
            b"name=Ann&tag=a&tag=b",
            headers=[(b"content-type", b"application/x-www-form-urlencoded; charset=utf-8")],
        )
        params = await req.body_params()
        assert params["name"] == "Ann"
        assert params.get_list("tag") == ["a", "b"]

    async def test_json_object(self) -> None:
        req = _request(b'{"n": 3, "ok": true}', headers=[(b"content-type", b"application/json")])
        params = await req.body_params()
        assert params["n"] == 3
        assert params["ok"] is True

    async def test_json_array_has_no_params(self) -> None:
        req = _request(b"[1, 2]", headers=[(b"content-type", b"application/json")])
        assert len(await req.body_params()) == 0

    async def test_invalid_json_has_no_params(self) -> None:
        req = _request(b"{oops", headers=[(b"content-type", b"application/json")])
        assert len(await req.body_params()) == 0

    async def test_other_content_type(self) -> None:
        req = _request(b"raw", headers=[(b"content-type", b"text/plain")])
        assert len(await req.body_params()) == 0


class TestParams:
    def test_merged_body_wins(self) -> None:
        query = Params.from_query_string("a=1&b=2")
        body = Params.from_query_string("b=3")
        merged = query.merged(body)
        assert merged["a"] == "1"
        assert merged["b"] == "3"

    def test_get_int(self) -> None:
        params = Params.from_query_string("n=5&x=abc")
        assert params.get_int("n") == 5
        assert params.get_int("x", 0) == 0
        assert params.get_int("missing") is None


class TestHeaders:
    def test_get_list_and_iteration(self) -> None:
        headers = Headers(((b"Accept", b"a"), (b"accept", b"b"), (b"Host", b"h")))
        assert headers.get_list("ACCEPT") == ["a", "b"]
        assert list(headers) == ["accept", "host"]
        assert len(headers) == 2
