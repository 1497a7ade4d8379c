"""Request-scoped context via ContextVar.

``request_var`` holds the request being dispatched. The ASGI handler
sets it before dispatch and resets it afterwards; the dispatcher reads
the method and ``Origin`` header from it.

Thread safety:
    ``ContextVar`` is task-local under asyncio and copied into worker
    threads started through anyio. No locks needed.
"""

from contextvars import ContextVar

from waypost.http.request import Request

request_var: ContextVar[Request] = ContextVar("waypost_request")
"""The current request. Set by the ASGI handler before dispatch."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()
