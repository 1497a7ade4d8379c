"""Declarative route authoring for controller classes.

Decorators record ``(method, path)`` marks on controller methods and a
prefix on the class. ``collect_routes`` turns a decorated class into the
flat ``RouteDeclaration`` stream the route table consumes::

    @route_group("/users")
    class UserController:
        @get("/")
        def index(self, request, response): ...

        @get("/{id}")
        def show(self, request, response, user_id): ...

    table.register_all(collect_routes(UserController))

The route table never looks at these marks itself.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, NamedTuple, TypeVar

from waypost.errors import ConfigurationError

F = TypeVar("F", bound=Callable[..., Any])
C = TypeVar("C", bound=type)

CANONICAL_METHODS: tuple[str, ...] = (
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

_ROUTES_ATTR = "__waypost_routes__"
_GROUP_ATTR = "__waypost_group__"


class RouteDeclaration(NamedTuple):
    """One entry of the registration stream."""

    method: str
    path: str
    handler: Callable[..., Any]
    group_prefix: str = ""


@dataclass(frozen=True, slots=True)
class ControllerAction:
    """Handler reference to a method on a controller class.

    Calling it creates a fresh controller instance and invokes the
    method with the dispatch arguments, so controllers hold no state
    across requests.
    """

    controller: type
    method_name: str

    def __post_init__(self) -> None:
        if not callable(getattr(self.controller, self.method_name, None)):
            msg = (
                f"{self.controller.__qualname__} has no callable "
                f"method {self.method_name!r}"
            )
            raise ConfigurationError(msg)

    @property
    def display_name(self) -> str:
        """``Controller.method``, for listings and logs."""
        return f"{self.controller.__qualname__}.{self.method_name}"

    def __call__(self, *args: Any) -> Any:
        instance = self.controller()
        return getattr(instance, self.method_name)(*args)


def route(method: str, path: str) -> Callable[[F], F]:
    """Mark a controller method as the handler for *method* and *path*.

    May be stacked to expose one method under several routes.
    """

    def decorator(func: F) -> F:
        target = func.__func__ if isinstance(func, (staticmethod, classmethod)) else func
        marks: list[tuple[str, str]] = list(getattr(target, _ROUTES_ATTR, ()))
        # Stacked decorators apply bottom-up; keep top-down reading order
        marks.insert(0, (method.upper(), path))
        setattr(target, _ROUTES_ATTR, tuple(marks))
        return func

    return decorator


def get(path: str) -> Callable[[F], F]:
    return route("GET", path)


def post(path: str) -> Callable[[F], F]:
    return route("POST", path)


def put(path: str) -> Callable[[F], F]:
    return route("PUT", path)


def delete(path: str) -> Callable[[F], F]:
    return route("DELETE", path)


def patch(path: str) -> Callable[[F], F]:
    return route("PATCH", path)


def options(path: str) -> Callable[[F], F]:
    return route("OPTIONS", path)


def head(path: str) -> Callable[[F], F]:
    return route("HEAD", path)


def trace(path: str) -> Callable[[F], F]:
    return route("TRACE", path)


def connect(path: str) -> Callable[[F], F]:
    return route("CONNECT", path)


def pri(path: str) -> Callable[[F], F]:
    return route("PRI", path)


def route_group(prefix: str) -> Callable[[C], C]:
    """Prefix every route declared on the decorated controller class."""

    def decorator(cls: C) -> C:
        setattr(cls, _GROUP_ATTR, prefix)
        return cls

    return decorator


def collect_routes(controller: type) -> list[RouteDeclaration]:
    """Collect the route declarations of a decorated controller class.

    Methods are visited in definition order, the class's own methods
    first, then inherited ones not overridden. Declaration order is
    preserved because lookup is first-match-wins.
    """
    if not isinstance(controller, type):
        msg = f"Expected a controller class, got {type(controller).__name__}"
        raise ConfigurationError(msg)

    prefix = controller.__dict__.get(_GROUP_ATTR, "")
    declarations: list[RouteDeclaration] = []
    seen: set[str] = set()

    for klass in controller.__mro__:
        if klass is object:
            continue
        for name, member in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            target = member.__func__ if isinstance(member, (staticmethod, classmethod)) else member
            marks = getattr(target, _ROUTES_ATTR, ())
            if not marks:
                continue
            action = ControllerAction(controller, name)
            declarations.extend(
                RouteDeclaration(method, path, action, prefix) for method, path in marks
            )

    return declarations
