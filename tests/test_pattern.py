"""Tests for waypost.routing.pattern — template compilation and path joining."""

import pytest

from waypost.errors import ConfigurationError
from waypost.routing.pattern import compile_pattern, join_path, normalize_path


class TestCompileLiteral:
    def test_root(self) -> None:
        pattern = compile_pattern("/")
        assert pattern.is_literal is True
        assert pattern.match("/") == ()
        assert pattern.match("") is None

    def test_static_path(self) -> None:
        pattern = compile_pattern("/users")
        assert pattern.match("/users") == ()
        assert pattern.match("/users/") is None
        assert pattern.match("/users/42") is None

    def test_full_match_not_prefix(self) -> None:
        pattern = compile_pattern("/users")
        assert pattern.match("/users_all") is None
        assert pattern.match("/api/users") is None

    def test_regex_metacharacters_are_literal(self) -> None:
        pattern = compile_pattern("/feed.json")
        assert pattern.match("/feed.json") == ()
        assert pattern.match("/feedXjson") is None

    def test_trailing_newline_not_accepted(self) -> None:
        assert compile_pattern("/users").match("/users\n") is None


class TestCompilePlaceholders:
    def test_single_param(self) -> None:
        pattern = compile_pattern("/users/{id}")
        assert pattern.param_names == ("id",)
        assert pattern.is_literal is False
        assert pattern.match("/users/42") == ("42",)

    def test_param_does_not_span_segments(self) -> None:
        pattern = compile_pattern("/users/{id}")
        assert pattern.match("/users/42/x") is None
        assert pattern.match("/users/") is None

    def test_param_charset(self) -> None:
        pattern = compile_pattern("/users/{id}")
        assert pattern.match("/users/abc_DEF_09") == ("abc_DEF_09",)
        assert pattern.match("/users/a-b") is None
        assert pattern.match("/users/a.b") is None

    def test_multiple_params_in_order(self) -> None:
        pattern = compile_pattern("/users/{user_id}/posts/{post_id}")
        assert pattern.param_names == ("user_id", "post_id")
        assert pattern.match("/users/7/posts/99") == ("7", "99")

    def test_params_within_one_segment(self) -> None:
        pattern = compile_pattern("/range/{start}-{end}")
        assert pattern.match("/range/10-20") == ("10", "20")

    def test_values_never_contain_slashes(self) -> None:
        pattern = compile_pattern("/{a}/{b}")
        values = pattern.match("/x/y")
        assert values == ("x", "y")
        assert all("/" not in v for v in values)

    def test_duplicate_names_still_positional(self) -> None:
        pattern = compile_pattern("/{id}/{id}")
        assert pattern.match("/1/2") == ("1", "2")


class TestCompileErrors:
    @pytest.mark.parametrize(
        "template",
        [
            "/users/{",
            "/users/{id",
            "/users/}",
            "/users/id}",
            "/users/{}",
            "/users/{user-id}",
            "/users/{id:int}",
            "/users/{a{b}}",
        ],
    )
    def test_malformed_placeholder(self, template: str) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            compile_pattern(template)
        assert template in str(exc_info.value)


class TestNormalizePath:
    def test_empty_is_root(self) -> None:
        assert normalize_path("") == "/"

    def test_root(self) -> None:
        assert normalize_path("/") == "/"

    def test_adds_leading_slash(self) -> None:
        assert normalize_path("users") == "/users"

    def test_strips_trailing_slash(self) -> None:
        assert normalize_path("/users/") == "/users"

    def test_collapses_duplicate_slashes(self) -> None:
        assert normalize_path("//api///users//") == "/api/users"


class TestJoinPath:
    def test_prefix_and_path(self) -> None:
        assert join_path("/api", "/widgets") == "/api/widgets"

    def test_slash_duplication_normalized(self) -> None:
        assert join_path("/api/", "/widgets/") == "/api/widgets"
        assert join_path("api", "widgets") == "/api/widgets"
        assert join_path("/api//", "//widgets") == "/api/widgets"

    def test_empty_prefix(self) -> None:
        assert join_path("", "/widgets") == "/widgets"

    def test_root_path_in_group(self) -> None:
        assert join_path("/api", "/") == "/api"

    def test_root_everything(self) -> None:
        assert join_path("", "/") == "/"
