"""ASGI glue between a server and the dispatcher."""

from waypost.server.handler import handle_request
from waypost.server.sender import send_response

__all__ = ["handle_request", "send_response"]
