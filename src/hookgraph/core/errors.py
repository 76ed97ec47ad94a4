"""
Custom exceptions for the hookgraph pipeline.

Every terminal failure of a request is one of these and knows how to
render itself into the ``{"errors": [...]}`` response shape.
"""

from __future__ import annotations

from typing import Any, Optional

from graphql import GraphQLError


class HookgraphError(Exception):
    """Base exception for all pipeline errors."""

    status_code: int = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def formatted(self) -> list[dict[str, Any]]:
        """Render as a list of GraphQL error entries."""
        return [{"message": self.message}]


class ParseError(HookgraphError):
    """Raised when query text is not a valid GraphQL document."""

    status_code = 400

    def __init__(self, message: str, source_error: Optional[GraphQLError] = None):
        self.source_error = source_error
        super().__init__(message)

    def formatted(self) -> list[dict[str, Any]]:
        if self.source_error is not None:
            return [self.source_error.formatted]
        return super().formatted()


class ContextBuildError(HookgraphError):
    """Raised when an on_context_building hook fails."""

    status_code = 500

    def __init__(self, plugin: str, message: str):
        self.plugin = plugin
        super().__init__(f"Context building failed in {plugin}: {message}")


class ValidationError(HookgraphError):
    """Raised when a document fails validation against the schema."""

    status_code = 400

    def __init__(self, errors: list[GraphQLError]):
        self.errors = errors
        super().__init__(f"Validation failed: {[e.message for e in errors]}")

    def formatted(self) -> list[dict[str, Any]]:
        return [error.formatted for error in self.errors]


class UnauthorizedError(HookgraphError):
    """Raised (or returned as an abort) when no identity is present."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ResolverError(HookgraphError):
    """
    Raised by resolvers.

    graphql-core turns it into a located error, so the response carries
    partial data plus an entry with ``path`` and ``locations``.
    """


class InstrumentationError(HookgraphError):
    """An after-hook failed. Logged only, never returned to the caller."""

    def __init__(self, plugin: str, hook: str, cause: BaseException):
        self.plugin = plugin
        self.hook = hook
        self.cause = cause
        super().__init__(f"{plugin}.{hook} failed: {cause}")
