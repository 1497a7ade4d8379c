"""Route table with first-match-wins lookup.

Routes are registered during setup, then the table is frozen and only
read. Entries are kept per method in registration order; lookup scans
them in that order and returns the first pattern that matches, so
declaration order is part of the routing contract::

    table = RouteTable()
    table.register("GET", "/users/me", show_me)     # must come first
    table.register("GET", "/users/{id}", show_user)
    table.freeze()
    match = table.lookup("GET", "/users/42")
"""

import logging
import re
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from itertools import groupby
from operator import attrgetter
from typing import Any

from waypost.errors import ConfigurationError
from waypost.routing.declarations import RouteDeclaration
from waypost.routing.pattern import compile_pattern, join_path
from waypost.routing.route import RouteEntry, RouteMatch

logger = logging.getLogger("waypost.routing")

# RFC 9110 token characters
_METHOD_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def _normalize_method(method: str) -> str:
    if not isinstance(method, str) or _METHOD_RE.fullmatch(method) is None:
        msg = f"Invalid HTTP method {method!r}"
        raise ConfigurationError(msg)
    return method.upper()


def _validate_prefix(prefix: str) -> None:
    if not isinstance(prefix, str):
        msg = f"Route group prefix must be a string, got {type(prefix).__name__}"
        raise ConfigurationError(msg)
    if "?" in prefix or "#" in prefix:
        msg = f"Route group prefix {prefix!r} may not contain a query or fragment"
        raise ConfigurationError(msg)
    # Raises ConfigurationError for malformed placeholders
    compile_pattern(prefix)


class RouteTable:
    """Ordered per-method route table.

    Mutable until ``freeze()``; afterwards safe to read from any number
    of concurrent dispatches.
    """

    __slots__ = ("_entries", "_frozen", "_literal_index", "_prefix")

    def __init__(self) -> None:
        # method -> entries in registration order
        self._entries: dict[str, list[RouteEntry]] = {}
        # method -> literal path -> position in _entries[method]
        self._literal_index: dict[str, dict[str, int]] = {}
        self._prefix = ""
        self._frozen = False

    # -- Registration --

    def register(self, method: str, path: str, handler: Callable[..., Any]) -> RouteEntry:
        """Register *handler* for *method* and *path* under the current prefix.

        A literal path registered twice for the same method replaces the
        earlier handler in place. Templated paths always append.
        """
        self._check_not_frozen()
        if not callable(handler):
            msg = f"Handler for {method} {path!r} is not callable: {handler!r}"
            raise ConfigurationError(msg)

        method = _normalize_method(method)
        full_path = join_path(self._prefix, path)
        entry = RouteEntry(
            method=method,
            path=full_path,
            pattern=compile_pattern(full_path),
            handler=handler,
        )

        entries = self._entries.setdefault(method, [])
        literals = self._literal_index.setdefault(method, {})

        if entry.pattern.is_literal and full_path in literals:
            entries[literals[full_path]] = entry
            logger.debug("Replaced %s %s -> %s", method, full_path, entry.handler_name)
            return entry

        if entry.pattern.is_literal:
            literals[full_path] = len(entries)
        entries.append(entry)
        logger.debug("Registered %s %s -> %s", method, full_path, entry.handler_name)
        return entry

    @contextmanager
    def group(self, prefix: str) -> Iterator[None]:
        """Prefix every route registered inside the ``with`` block.

        Groups nest; the previous prefix is restored on exit, also when
        registration fails, so one batch never leaks into the next.
        """
        self._check_not_frozen()
        _validate_prefix(prefix)
        previous = self._prefix
        self._prefix = join_path(previous, prefix)
        try:
            yield
        finally:
            self._prefix = previous

    def register_all(self, declarations: Iterable[RouteDeclaration]) -> list[RouteEntry]:
        """Register a stream of declarations, honoring each group prefix.

        Consecutive declarations sharing a ``group_prefix`` form one batch.
        Plain ``(method, path, handler[, group_prefix])`` tuples are accepted.
        """
        stream = (RouteDeclaration(*decl) for decl in declarations)
        registered: list[RouteEntry] = []
        for prefix, batch in groupby(stream, key=attrgetter("group_prefix")):
            with self.group(prefix or ""):
                registered.extend(
                    self.register(decl.method, decl.path, decl.handler) for decl in batch
                )
        return registered

    # -- Lifecycle --

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Mark construction complete. No more routes can be added."""
        if self._frozen:
            return
        self._frozen = True
        if logger.isEnabledFor(logging.DEBUG):
            for entry in self.routes:
                logger.debug("Route %s %s -> %s", entry.method, entry.path, entry.handler_name)

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = "Cannot add routes after the route table is frozen."
            raise RuntimeError(msg)

    # -- Lookup --

    def lookup(self, method: str, uri: str) -> RouteMatch | None:
        """Find the handler for *method* and *uri*.

        Returns the first registered entry whose pattern matches the
        whole of *uri*, falling back to an exact literal-path lookup.
        Returns ``None`` when nothing matches.
        """
        method = method.upper()
        entries = self._entries.get(method)
        if not entries:
            return None

        for entry in entries:
            params = entry.pattern.match(uri)
            if params is not None:
                return RouteMatch(entry=entry, params=params)

        index = self._literal_index[method].get(uri)
        if index is not None:
            return RouteMatch(entry=entries[index])

        return None

    # -- Introspection --

    @property
    def routes(self) -> list[RouteEntry]:
        """All entries, grouped by method, in registration order."""
        return [entry for entries in self._entries.values() for entry in entries]

    @property
    def methods(self) -> frozenset[str]:
        """Methods with at least one registered route."""
        return frozenset(method for method, entries in self._entries.items() if entries)

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._entries.values())

    def __iter__(self) -> Iterator[RouteEntry]:
        return iter(self.routes)
