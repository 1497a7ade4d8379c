"""Router configuration.

RouterConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups at request time.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from waypost.cors import CORSPolicy
from waypost.errors import ConfigurationError

# Keys accepted by ``RouterConfig.from_mapping``, including the camelCase
# spelling used by existing deployment configs.
_MAPPING_KEYS: dict[str, str] = {
    "baseUri": "base_uri",
    "base_uri": "base_uri",
    "allowedOrigins": "allowed_origins",
    "allowed_origins": "allowed_origins",
    "offloadSyncHandlers": "offload_sync_handlers",
    "offload_sync_handlers": "offload_sync_handlers",
}


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    All fields have permissive defaults (no base URI, CORS disabled)::

        config = RouterConfig(
            base_uri="/api",
            allowed_origins={"https://a.example": ["GET", "POST"]},
        )
    """

    # Literal prefix stripped from incoming paths before matching
    base_uri: str = ""

    # Origin token ("*" or an exact origin) -> allowed methods.
    # Empty disables CORS enforcement entirely.
    allowed_origins: Mapping[str, Iterable[str]] = field(default_factory=dict)

    # Run sync handlers in a worker thread instead of on the event loop
    offload_sync_handlers: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.base_uri, str):
            msg = f"base_uri must be a string, got {type(self.base_uri).__name__}"
            raise ConfigurationError(msg)

        # CORSPolicy validates and normalizes the allow-list
        policy = CORSPolicy(self.allowed_origins)
        object.__setattr__(self, "allowed_origins", policy.allowed_origins)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RouterConfig:
        """Build a config from a plain mapping (e.g. parsed JSON or TOML).

        Accepts both ``base_uri`` and ``baseUri`` spellings. Unknown keys
        raise ``ConfigurationError`` so typos are caught at startup.
        """
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _MAPPING_KEYS.get(key)
            if name is None:
                msg = f"Unknown router configuration option {key!r}"
                raise ConfigurationError(msg)
            kwargs[name] = value
        return cls(**kwargs)

    @property
    def cors_enabled(self) -> bool:
        """True when an allow-list is configured."""
        return bool(self.allowed_origins)
