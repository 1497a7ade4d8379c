"""HTTP request and response types handed to route handlers."""

from waypost.http.headers import Headers
from waypost.http.request import Request
from waypost.http.response import Response

__all__ = ["Headers", "Request", "Response"]
