"""The waypost router.

Mutable during setup (route registration). Frozen when it starts
serving: on ASGI lifespan startup, on the first dispatch, or by an
explicit ``freeze()`` call.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any, TypeVar

from waypost._internal.asgi import Receive, Scope, Send
from waypost.config import RouterConfig
from waypost.cors import CORSPolicy
from waypost.dispatcher import Dispatcher
from waypost.http.request import Request
from waypost.http.response import Response
from waypost.routing.declarations import RouteDeclaration, collect_routes
from waypost.routing.route import RouteEntry
from waypost.routing.table import RouteTable
from waypost.server.handler import handle_request

logger = logging.getLogger("waypost.routing")

H = TypeVar("H", bound=Callable[..., Any])


class Router:
    """Request router with CORS enforcement.

    Handlers are called as ``handler(request, response, *params)`` where
    ``params`` are the path placeholder values in template order::

        router = Router(RouterConfig(base_uri="/app"))

        @router.get("/users/{id}")
        def show_user(request, response, user_id):
            response.with_json({"id": user_id})

        router.include(UserController)   # decorated controller class

    Lookup is first-match-wins in registration order: register specific
    routes (``/users/me``) before general ones (``/users/{id}``).

    Thread safety:
        Registration is single-threaded. The freeze transition uses a
        Lock + double-check so exactly one thread freezes the table, even
        when several ASGI workers receive their first request together.
    """

    __slots__ = ("_dispatcher", "_freeze_lock", "_frozen", "_table", "config")

    def __init__(self, config: RouterConfig | Mapping[str, Any] | None = None) -> None:
        if config is None:
            config = RouterConfig()
        elif not isinstance(config, RouterConfig):
            config = RouterConfig.from_mapping(config)
        self.config: RouterConfig = config
        self._table = RouteTable()
        self._dispatcher = Dispatcher(
            self._table,
            policy=CORSPolicy(config.allowed_origins),
            base_uri=config.base_uri,
            offload_sync_handlers=config.offload_sync_handlers,
        )
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Route registration --

    def add(self, method: str, path: str, handler: Callable[..., Any]) -> RouteEntry:
        """Register *handler* for *method* and *path*."""
        self._check_not_frozen()
        return self._table.register(method, path, handler)

    def route(self, path: str, *, methods: Iterable[str] = ("GET",)) -> Callable[[H], H]:
        """Register a handler for several methods via decorator."""

        def decorator(func: H) -> H:
            for method in methods:
                self.add(method, path, func)
            return func

        return decorator

    def _method_route(self, method: str, path: str, handler: H | None) -> Any:
        if handler is not None:
            return self.add(method, path, handler)

        def decorator(func: H) -> H:
            self.add(method, path, func)
            return func

        return decorator

    def get(self, path: str, handler: H | None = None) -> Any:
        """Register a GET handler, directly or as a decorator."""
        return self._method_route("GET", path, handler)

    def post(self, path: str, handler: H | None = None) -> Any:
        """Register a POST handler, directly or as a decorator."""
        return self._method_route("POST", path, handler)

    def put(self, path: str, handler: H | None = None) -> Any:
        """Register a PUT handler, directly or as a decorator."""
        return self._method_route("PUT", path, handler)

    def delete(self, path: str, handler: H | None = None) -> Any:
        """Register a DELETE handler, directly or as a decorator."""
        return self._method_route("DELETE", path, handler)

    def patch(self, path: str, handler: H | None = None) -> Any:
        """Register a PATCH handler, directly or as a decorator."""
        return self._method_route("PATCH", path, handler)

    def options(self, path: str, handler: H | None = None) -> Any:
        """Register an OPTIONS handler, directly or as a decorator."""
        return self._method_route("OPTIONS", path, handler)

    def head(self, path: str, handler: H | None = None) -> Any:
        """Register a HEAD handler, directly or as a decorator."""
        return self._method_route("HEAD", path, handler)

    def trace(self, path: str, handler: H | None = None) -> Any:
        """Register a TRACE handler, directly or as a decorator."""
        return self._method_route("TRACE", path, handler)

    def connect(self, path: str, handler: H | None = None) -> Any:
        """Register a CONNECT handler, directly or as a decorator."""
        return self._method_route("CONNECT", path, handler)

    def pri(self, path: str, handler: H | None = None) -> Any:
        """Register a PRI handler, directly or as a decorator."""
        return self._method_route("PRI", path, handler)

    @contextmanager
    def group(self, prefix: str) -> Iterator["Router"]:
        """Prefix every route registered inside the ``with`` block::

            with router.group("/api"):
                router.get("/widgets", list_widgets)   # GET /api/widgets
        """
        self._check_not_frozen()
        with self._table.group(prefix):
            yield self

    def include(self, *controllers: type) -> list[RouteEntry]:
        """Register the decorated routes of one or more controller classes.

        Each controller is its own batch: its ``route_group`` prefix
        applies to its routes only.
        """
        self._check_not_frozen()
        registered: list[RouteEntry] = []
        for controller in controllers:
            registered.extend(self._table.register_all(collect_routes(controller)))
        return registered

    def register_all(self, declarations: Iterable[RouteDeclaration]) -> list[RouteEntry]:
        """Register a stream of ``(method, path, handler, group_prefix)`` tuples."""
        self._check_not_frozen()
        return self._table.register_all(declarations)

    # -- Introspection --

    @property
    def routes(self) -> list[RouteEntry]:
        """All registered routes, grouped by method, in registration order."""
        return self._table.routes

    @property
    def table(self) -> RouteTable:
        return self._table

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Serving --

    async def dispatch(self, raw_uri: str, request: Request, response: Response) -> None:
        """Route one request, writing the outcome to *response*.

        Freezes the router on first use. Never raises for per-request
        failures: they become 403, 404, or 500 responses.
        """
        self.freeze()
        await self._dispatcher.dispatch(raw_uri, request, response)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return
        self.freeze()
        await handle_request(scope, receive, send, dispatcher=self._dispatcher)

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Freeze at startup so configuration errors fail the server start."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self.freeze()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def freeze(self) -> None:
        """Mark construction complete. Idempotent and thread-safe.

        After this the route table and CORS policy are read-only and
        registration raises ``RuntimeError``.
        """
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._table.freeze()
            self._frozen = True
            logger.debug(
                "Router frozen with %d routes (base_uri=%r, cors=%s)",
                len(self._table),
                self.config.base_uri,
                "on" if self.config.cors_enabled else "off",
            )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the router after it has started serving requests. "
                "Register routes before the first dispatch."
            )
            raise RuntimeError(msg)
