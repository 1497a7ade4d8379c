"""Invoke helper — call sync or async handlers uniformly.

Handlers can be ``def`` or ``async def`` (controller actions included).
The dispatcher calls every handler through ``invoke`` so the sync/async
check lives in exactly one place.
"""

import inspect
from functools import partial
from typing import Any

from anyio import to_thread


async def invoke(handler: Any, *args: Any, offload: bool = False) -> Any:
    """Call a handler and await the result if it's awaitable.

    With ``offload=True`` a handler that is not a coroutine function runs
    in a worker thread via ``anyio.to_thread``, keeping blocking handlers
    off the event loop. Context variables are carried into the thread.
    An awaitable it returns is still awaited on the event loop.
    """
    if offload and not inspect.iscoroutinefunction(handler):
        result = await to_thread.run_sync(partial(handler, *args))
    else:
        result = handler(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
