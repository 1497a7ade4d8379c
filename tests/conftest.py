"""Shared pytest fixtures for waypost tests."""

import pytest

from waypost.http.headers import Headers
from waypost.http.request import Request


@pytest.fixture
def make_request():
    """Build a Request with an optional ``Origin`` header."""

    def _make(method: str = "GET", path: str = "/", origin: str | None = None) -> Request:
        headers = Headers.from_mapping({"origin": origin}) if origin is not None else Headers()
        return Request(method=method, path=path, headers=headers)

    return _make
