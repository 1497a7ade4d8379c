"""Waypost — method and path routing with CORS enforcement.

Maps an HTTP method and URI path to a registered handler, passing the
path placeholder values positionally, and gates requests through an
origin/method allow-list before dispatch.

Basic usage::

    from waypost import Router, RouterConfig

    router = Router(RouterConfig(allowed_origins={"https://a.example": ["GET"]}))

    @router.get("/users/{id}")
    def show_user(request, response, user_id):
        response.with_json({"id": user_id})

The router is an ASGI application; serve it with any ASGI server.
"""

__version__ = "0.1.0"
__all__ = [
    "CORSPolicy",
    "ConfigurationError",
    "Dispatcher",
    "Forbidden",
    "HTTPError",
    "HandlerError",
    "NotFound",
    "Request",
    "Response",
    "RouteTable",
    "Router",
    "RouterConfig",
    "WaypostError",
    "collect_routes",
    "get_request",
    "route",
    "route_group",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import waypost`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from waypost.router import Router

        return Router

    if name == "RouterConfig":
        from waypost.config import RouterConfig

        return RouterConfig

    if name == "Dispatcher":
        from waypost.dispatcher import Dispatcher

        return Dispatcher

    if name == "CORSPolicy":
        from waypost.cors import CORSPolicy

        return CORSPolicy

    if name in ("Request", "Response"):
        from waypost import http as _http

        return getattr(_http, name)

    if name in ("RouteTable", "collect_routes", "route", "route_group"):
        from waypost import routing as _routing

        return getattr(_routing, name)

    if name == "get_request":
        from waypost.context import get_request

        return get_request

    if name in (
        "ConfigurationError",
        "Forbidden",
        "HTTPError",
        "HandlerError",
        "NotFound",
        "WaypostError",
    ):
        from waypost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
