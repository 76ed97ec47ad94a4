"""
Per-request context.

A fresh ``RequestContext`` is created for every request and filled in by
the plugins' ``on_context_building`` hooks before execution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Identity:
    """
    The authenticated user making the request.

    Written into the context by the authorization plugin.
    """
    name: str
    roles: tuple[str, ...] = ()


@dataclass(frozen=True)
class TransportInput:
    """
    Transport metadata the context builder can read.

    Header names are stored lower-cased so lookups are case-insensitive.
    """
    headers: Mapping[str, str] = field(default_factory=dict)
    method: str = "POST"
    path: str = "/graphql"
    client: Optional[str] = None

    def __post_init__(self):
        normalized = {k.lower(): v for k, v in self.headers.items()}
        object.__setattr__(self, "headers", MappingProxyType(normalized))

    def header(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get a header value by case-insensitive name."""
        return self.headers.get(name.lower(), default)

    @classmethod
    def from_request(cls, request: Any) -> "TransportInput":
        """Build from a Starlette/FastAPI request."""
        return cls(
            headers=dict(request.headers.items()),
            method=request.method,
            path=request.url.path,
            client=request.client.host if request.client else None,
        )


@dataclass
class RequestContext:
    """
    Context passed through the pipeline and into resolvers as ``info.context``.

    Contains:
    - transport: metadata of the inbound request
    - user: identity set by the authorization plugin (None when anonymous)
    - extras: values contributed by other plugins
    """
    transport: TransportInput
    user: Optional[Identity] = None
    extras: dict[str, Any] = field(default_factory=dict)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
