"""RouteEntry and RouteMatch frozen dataclasses."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from waypost.routing.pattern import PathPattern


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """A registered route.

    Created by ``RouteTable.register`` with the prefix already merged
    into ``path``. Immutable after creation.
    """

    method: str
    path: str
    pattern: PathPattern
    handler: Callable[..., Any]

    @property
    def handler_name(self) -> str:
        """Human-readable handler name for listings and logs."""
        for attr in ("display_name", "__qualname__", "__name__"):
            name = getattr(self.handler, attr, None)
            if isinstance(name, str):
                return name
        return repr(self.handler)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful lookup.

    ``params`` holds the captured values in placeholder order.
    """

    entry: RouteEntry
    params: tuple[str, ...] = ()
