"""Tests for waypost.routing.declarations — controller decorators and collection."""

import pytest

from waypost.errors import ConfigurationError
from waypost.routing.declarations import (
    CANONICAL_METHODS,
    ControllerAction,
    RouteDeclaration,
    collect_routes,
    delete,
    get,
    post,
    pri,
    put,
    route,
    route_group,
)


@route_group("/users")
class UserController:
    instances = 0

    def __init__(self) -> None:
        type(self).instances += 1

    @get("/")
    def index(self, request, response) -> str:
        return "index"

    @get("/{id}")
    def show(self, request, response, user_id: str) -> str:
        return f"show {user_id}"

    @post("/")
    @put("/{id}")
    def save(self, request, response, *args: str) -> str:
        return "save"

    def helper(self) -> str:
        return "not a route"


class PlainController:
    @delete("/items/{id}")
    def remove(self, request, response, item_id: str) -> str:
        return item_id

    @staticmethod
    @route("PATCH", "/items")
    def bulk(request, response) -> str:
        return "bulk"


class TestCollectRoutes:
    def test_definition_order_and_prefix(self) -> None:
        declarations = collect_routes(UserController)

        assert [(d.method, d.path, d.group_prefix) for d in declarations] == [
            ("GET", "/", "/users"),
            ("GET", "/{id}", "/users"),
            ("POST", "/", "/users"),
            ("PUT", "/{id}", "/users"),
        ]
        assert all(isinstance(d, RouteDeclaration) for d in declarations)

    def test_handlers_are_controller_actions(self) -> None:
        declarations = collect_routes(UserController)

        action = declarations[1].handler
        assert isinstance(action, ControllerAction)
        assert action.controller is UserController
        assert action.method_name == "show"
        assert action.display_name == "UserController.show"

    def test_no_group(self) -> None:
        declarations = collect_routes(PlainController)

        assert [(d.method, d.path, d.group_prefix) for d in declarations] == [
            ("DELETE", "/items/{id}", ""),
            ("PATCH", "/items", ""),
        ]

    def test_inherited_routes_after_own(self) -> None:
        class Base:
            @get("/base")
            def base_route(self, request, response) -> None: ...

            @get("/overridden")
            def shared(self, request, response) -> None: ...

        class Child(Base):
            @get("/child")
            def child_route(self, request, response) -> None: ...

            def shared(self, request, response) -> None: ...

        declarations = collect_routes(Child)
        assert [d.path for d in declarations] == ["/child", "/base"]

    def test_group_not_inherited(self) -> None:
        class Admin(UserController):
            pass

        assert {d.group_prefix for d in collect_routes(Admin)} == {""}

    def test_rejects_non_class(self) -> None:
        with pytest.raises(ConfigurationError):
            collect_routes(UserController())  # type: ignore[arg-type]


class TestControllerAction:
    def test_fresh_instance_per_call(self) -> None:
        action = ControllerAction(UserController, "show")
        before = UserController.instances

        assert action("req", "res", "7") == "show 7"
        assert action("req", "res", "8") == "show 8"
        assert UserController.instances == before + 2

    def test_static_method(self) -> None:
        assert ControllerAction(PlainController, "bulk")("req", "res") == "bulk"

    def test_missing_method(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ControllerAction(UserController, "destroy")
        assert "destroy" in str(exc_info.value)


class TestDecorators:
    def test_method_helpers(self) -> None:
        @pri("/preface")
        def preface(request, response) -> None: ...

        assert preface.__waypost_routes__ == (("PRI", "/preface"),)

    def test_route_uppercases_method(self) -> None:
        @route("options", "/x")
        def opts(request, response) -> None: ...

        assert opts.__waypost_routes__ == (("OPTIONS", "/x"),)

    def test_decorator_returns_function(self) -> None:
        def handler(request, response) -> None: ...

        assert get("/h")(handler) is handler

    def test_canonical_methods(self) -> None:
        assert CANONICAL_METHODS == (
            "GET",
            "POST",
            "PUT",
            "DELETE",
            "PATCH",
            "OPTIONS",
            "HEAD",
            "TRACE",
            "CONNECT",
            "PRI",
        )
