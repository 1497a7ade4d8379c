"""CORS allow-list authorization.

A coarse policy: each allowed origin (or ``"*"``) maps to the methods it
may use. A request either passes, and the response gains the CORS
headers, or is rejected with 403 before any route lookup.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from waypost.errors import ConfigurationError
from waypost.routing.declarations import CANONICAL_METHODS

ALLOW_METHODS_VALUE = ", ".join(CANONICAL_METHODS)
ALLOW_HEADERS_VALUE = "Content-Type, Authorization"


@dataclass(frozen=True, slots=True)
class CORSPolicy:
    """Origin/method allow-list. Immutable after creation.

    An empty policy disables enforcement: ``enabled`` is False and the
    dispatcher skips authorization and header injection entirely::

        CORSPolicy({"https://a.example": ["GET"], "*": ["OPTIONS"]})
    """

    allowed_origins: Mapping[str, Iterable[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized: dict[str, frozenset[str]] = {}
        for origin, methods in self.allowed_origins.items():
            if not isinstance(origin, str) or not origin:
                msg = f"Allowed origin must be a non-empty string, got {origin!r}"
                raise ConfigurationError(msg)
            if isinstance(methods, str):
                msg = (
                    f"Allowed methods for {origin!r} must be a collection of "
                    f"method names, not the string {methods!r}"
                )
                raise ConfigurationError(msg)
            normalized[origin] = frozenset(m.upper() for m in methods)
        object.__setattr__(self, "allowed_origins", MappingProxyType(normalized))

    @property
    def enabled(self) -> bool:
        return bool(self.allowed_origins)

    def is_allowed(self, origin: str, method: str) -> bool:
        """True if an entry for ``"*"`` or *origin* allows *method*."""
        method = method.upper()
        return any(
            (allowed == "*" or allowed == origin) and method in methods
            for allowed, methods in self.allowed_origins.items()
        )

    def headers_for(self, origin: str) -> tuple[tuple[str, str], ...]:
        """Response headers for an authorized request from *origin*."""
        return (
            ("Access-Control-Allow-Origin", origin),
            ("Access-Control-Allow-Methods", ALLOW_METHODS_VALUE),
            ("Access-Control-Allow-Headers", ALLOW_HEADERS_VALUE),
        )
