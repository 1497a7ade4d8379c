"""Request dispatch: CORS check, route lookup, handler invocation.

``Dispatcher.dispatch`` is a stateless transaction over a frozen route
table and CORS policy. Every outcome is written to the response; no
exception escapes to the caller.
"""

import logging
from urllib.parse import urlsplit

from waypost._internal.invoke import invoke
from waypost.context import request_var
from waypost.cors import CORSPolicy
from waypost.errors import Forbidden, HandlerError, HTTPError, NotFound
from waypost.http.request import Request
from waypost.http.response import Response
from waypost.routing.route import RouteMatch
from waypost.routing.table import RouteTable

logger = logging.getLogger("waypost.dispatch")


def write_error(response: Response, exc: HTTPError) -> None:
    """Overwrite *response* with the JSON body for *exc*.

    Headers already set (e.g. CORS headers) are kept.
    """
    response.with_status(exc.status).with_json(exc.to_payload())
    response.with_headers(exc.headers)


class Dispatcher:
    """Resolves requests against a route table and invokes handlers.

    Usage::

        dispatcher = Dispatcher(table, policy=CORSPolicy(...), base_uri="/app")
        await dispatcher.dispatch("/app/users/42?x=1", request, response)
    """

    __slots__ = ("base_uri", "offload_sync_handlers", "policy", "table")

    def __init__(
        self,
        table: RouteTable,
        *,
        policy: CORSPolicy | None = None,
        base_uri: str = "",
        offload_sync_handlers: bool = False,
    ) -> None:
        self.table = table
        self.policy = policy or CORSPolicy()
        self.base_uri = base_uri
        self.offload_sync_handlers = offload_sync_handlers

    def resolve_path(self, raw_uri: str) -> str:
        """Path component of *raw_uri* with the base URI stripped."""
        path = urlsplit(raw_uri).path
        if self.base_uri and path.startswith(self.base_uri):
            path = path[len(self.base_uri) :]
            if not path.startswith("/"):
                path = "/" + path
        return path

    async def dispatch(self, raw_uri: str, request: Request, response: Response) -> None:
        """Route one request and write the outcome to *response*.

        Exactly one of: the handler runs, or the response carries a
        403, 404, or 500 JSON error body.
        """
        method = ""
        path = raw_uri
        try:
            # Method and Origin come from the active request; fall back to
            # the passed request when dispatching outside the ASGI handler.
            active = request_var.get(request)
            method = active.method.upper()
            path = self.resolve_path(raw_uri)

            if self.policy.enabled:
                origin = active.origin
                if not self.policy.is_allowed(origin, method):
                    raise Forbidden
                response.with_headers(self.policy.headers_for(origin))

            match = self.table.lookup(method, path)
            if match is None:
                raise NotFound

            logger.debug(
                "%s %s matched %s -> %s%r",
                method,
                path,
                match.entry.path,
                match.entry.handler_name,
                match.params,
            )
            await self._call_handler(match, request, response)

        except HTTPError as exc:
            if exc.status >= 500:
                logger.exception("%d %s %s", exc.status, method, path)
            else:
                logger.debug("%d %s %s — %s", exc.status, method, path, exc.detail)
            write_error(response, exc)
        except Exception as exc:
            logger.exception("500 %s %s", method, path)
            write_error(response, HandlerError(str(exc) or type(exc).__name__))

    async def _call_handler(self, match: RouteMatch, request: Request, response: Response) -> None:
        try:
            await invoke(
                match.entry.handler,
                request,
                response,
                *match.params,
                offload=self.offload_sync_handlers,
            )
        except Exception as exc:
            raise HandlerError(str(exc) or type(exc).__name__) from exc
