"""Immutable HTTP request.

Frozen metadata with async body access. Handlers receive it as their
first argument; the dispatcher reads the method and ``Origin`` header
from it.
"""

from __future__ import annotations

import json
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any

from waypost._internal.asgi import Receive
from waypost.http.headers import Headers


async def _empty_receive() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Metadata (method, path, headers) is frozen at creation. The body is
    read asynchronously via ``.body()``, ``.text()``, ``.json()``.
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query_string: str = ""
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    # Undecoded request path; percent escapes such as %3F or %2F stay literal
    raw_path: str = ""

    # Private: ASGI receive callable for body streaming
    _receive: Receive = field(default=_empty_receive, repr=False, compare=False)

    # Private: mutable cache for the body bytes
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @property
    def uri(self) -> str:
        """Raw request target: undecoded path plus query string."""
        path = self.raw_path or self.path
        if self.query_string:
            return f"{path}?{self.query_string}"
        return path

    @property
    def origin(self) -> str:
        """The ``Origin`` header, or ``""`` when absent."""
        return self.headers.get("origin") or ""

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    # -- Async body access --

    async def body(self) -> bytes:
        """Read the full request body.

        Cached: the ASGI receive is consumed once, later calls return
        the same bytes.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks = [chunk async for chunk in self.stream()]
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    async def stream(self) -> AsyncGenerator[bytes, None]:
        """Stream the request body in chunks."""
        while True:
            message = await self._receive()
            chunk = message.get("body", b"")
            if chunk:
                yield chunk
            if not message.get("more_body", False):
                break

    async def text(self) -> str:
        raw = await self.body()
        return raw.decode("utf-8")

    async def json(self) -> Any:
        raw = await self.body()
        return json.loads(raw)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: dict[str, Any], receive: Receive) -> Request:
        """Create a Request from an ASGI HTTP scope and receive callable."""
        client = scope.get("client")
        raw_path = scope.get("raw_path")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"],
            headers=Headers(scope.get("headers", ())),
            query_string=scope.get("query_string", b"").decode("latin-1"),
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            raw_path=raw_path.decode("latin-1") if raw_path else scope["path"],
            _receive=receive,
        )
