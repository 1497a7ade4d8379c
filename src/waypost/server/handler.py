"""ASGI handler — translates ASGI scope/messages to waypost types.

The only component that touches raw ASGI HTTP messages. Builds the
Request, sets the request context, runs the dispatcher, and sends the
Response back through ASGI ``send()``.
"""

from contextvars import Token

from waypost._internal.asgi import Receive, Scope, Send
from waypost.context import request_var
from waypost.dispatcher import Dispatcher
from waypost.http.request import Request
from waypost.http.response import Response
from waypost.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
) -> None:
    """Process a single HTTP request through the dispatcher."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = Response()

    token: Token[Request] = request_var.set(request)
    try:
        await dispatcher.dispatch(request.uri, request, response)
    finally:
        request_var.reset(token)

    await send_response(response, send)
