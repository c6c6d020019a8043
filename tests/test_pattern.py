"""Tests for peep.routing.pattern: placeholder compilation."""

import re

import pytest

from peep.errors import ConfigurationError
from peep.routing.pattern import compile_pattern


class TestStatic:
    def test_exact_match(self) -> None:
        p = compile_pattern("/users")
        assert p.match("/users") == {}
        assert p.match("/users/1") is None
        assert p.names == ()

    def test_root(self) -> None:
        assert compile_pattern("/").match("/") == {}

    def test_regex_characters_are_literal(self) -> None:
        p = compile_pattern("/a.b+c")
        assert p.match("/a.b+c") == {}
        assert p.match("/aXbbc") is None


class TestRequiredPlaceholder:
    def test_single(self) -> None:
        p = compile_pattern("/person/:name")
        assert p.match("/person/Alice") == {"name": "Alice"}
        assert p.names == ("name",)

    def test_does_not_cross_slash(self) -> None:
        assert compile_pattern("/person/:name").match("/person/a/b") is None

    def test_requires_value(self) -> None:
        assert compile_pattern("/person/:name").match("/person/") is None

    def test_multiple(self) -> None:
        p = compile_pattern("/:name/:id")
        assert p.match("/james/1000") == {"name": "james", "id": "1000"}

    def test_braces_inside_segment(self) -> None:
        p = compile_pattern("/file/{:name}.txt")
        assert p.match("/file/notes.txt") == {"name": "notes"}
        assert p.match("/file/notes.md") is None


class TestOptionalPlaceholder:
    def test_present(self) -> None:
        assert compile_pattern("/page/?num").match("/page/3") == {"num": "3"}

    def test_absent_drops_slash_and_key(self) -> None:
        assert compile_pattern("/page/?num").match("/page") == {}

    def test_braced_optional(self) -> None:
        p = compile_pattern("/report{?year}")
        assert p.match("/report") == {}
        assert p.match("/report2024") == {"year": "2024"}


class TestGreedyPlaceholder:
    def test_takes_rest_of_path(self) -> None:
        p = compile_pattern("/static/*path")
        assert p.match("/static/css/site.css") == {"path": "css/site.css"}

    def test_needs_something(self) -> None:
        assert compile_pattern("/static/*path").match("/static/") is None


class TestCompiledRegex:
    def test_named_groups(self) -> None:
        p = compile_pattern(re.compile(r"/item/(?P<id>\d+)"))
        assert p.match("/item/12") == {"id": "12"}
        assert p.match("/item/abc") is None
        assert p.names == ("id",)

    def test_fullmatch(self) -> None:
        p = compile_pattern(re.compile(r"/item"))
        assert p.match("/item/extra") is None


class TestErrors:
    def test_duplicate_names(self) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate placeholder 'id'"):
            compile_pattern("/:id/:id")

    def test_stray_braces(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            compile_pattern("/users/{id}")
        assert "{:name}" in str(exc_info.value)
        assert "/users/{id}" in str(exc_info.value)
