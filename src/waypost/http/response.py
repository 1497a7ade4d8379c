"""Mutable HTTP response passed to handlers.

Handlers receive it alongside the request and fill in status, headers,
and body. The chainable ``.with_*()`` methods mutate and return the
same object::

    def show(request, response, user_id):
        response.with_status(200).with_json({"id": user_id})
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

JSON_CONTENT_TYPE = "application/json"


@dataclass(slots=True)
class Response:
    """An HTTP response under construction.

    Header names are matched case-insensitively; setting a header
    replaces any earlier value with the same name.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: list[tuple[str, str]] = field(default_factory=list)

    # -- Chainable mutation --

    def with_status(self, status: int) -> Response:
        self.status = status
        return self

    def with_header(self, name: str, value: str) -> Response:
        """Set header *name*, replacing existing values."""
        lowered = name.lower()
        self.headers = [(n, v) for n, v in self.headers if n.lower() != lowered]
        self.headers.append((name, value))
        return self

    def with_headers(self, headers: Mapping[str, str] | tuple[tuple[str, str], ...]) -> Response:
        items = headers.items() if isinstance(headers, Mapping) else headers
        for name, value in items:
            self.with_header(name, value)
        return self

    def with_content_type(self, content_type: str) -> Response:
        self.content_type = content_type
        return self

    def with_body(self, body: str | bytes) -> Response:
        self.body = body
        return self

    def with_json(self, data: Any) -> Response:
        """Serialize *data* as compact JSON and set the content type."""
        self.body = json.dumps(data, separators=(",", ":"))
        self.content_type = JSON_CONTENT_TYPE
        return self

    # -- Accessors --

    def get_header(self, name: str, default: str | None = None) -> str | None:
        lowered = name.lower()
        for n, v in self.headers:
            if n.lower() == lowered:
                return v
        return default

    @property
    def body_bytes(self) -> bytes:
        """Body encoded as bytes (UTF-8 for str bodies)."""
        if isinstance(self.body, bytes):
            return self.body
        return self.body.encode("utf-8")

    @property
    def text(self) -> str:
        """Body decoded as UTF-8 text."""
        if isinstance(self.body, str):
            return self.body
        return self.body.decode("utf-8")

    def json(self) -> Any:
        """Parse the body as JSON."""
        return json.loads(self.body_bytes)
