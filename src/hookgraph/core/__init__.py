"""
Core module - hook contract, boundary types and errors.
"""

from __future__ import annotations

from .errors import (
    ContextBuildError,
    HookgraphError,
    InstrumentationError,
    ParseError,
    ResolverError,
    UnauthorizedError,
    ValidationError,
)
from .hooks import (
    ExecuteDone,
    ExecutionArgs,
    HookResult,
    Plugin,
    ValidateArgs,
    ValidateDone,
    coerce_hook_result,
    plugin_name,
)
from .query_types import GraphQLRequest, QueryResult

__all__ = [
    # Errors
    "HookgraphError",
    "ParseError",
    "ContextBuildError",
    "ValidationError",
    "UnauthorizedError",
    "ResolverError",
    "InstrumentationError",
    # Hooks
    "Plugin",
    "HookResult",
    "ExecutionArgs",
    "ValidateArgs",
    "ExecuteDone",
    "ValidateDone",
    "coerce_hook_result",
    "plugin_name",
    # Boundary types
    "GraphQLRequest",
    "QueryResult",
]
