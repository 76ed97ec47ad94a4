"""
hookgraph - GraphQL over HTTP with a pluggable execution pipeline.

Plugins observe and influence each request's lifecycle
(context building -> parse -> validate -> execute) without the engine
knowing what any of them does.

Usage:
    from hookgraph import GraphQLServer

    app = GraphQLServer().app

Or without HTTP:
    from hookgraph import build_pipeline, TimingPlugin

    pipeline = build_pipeline([TimingPlugin()], schema=schema, root_value=root)
    result = await pipeline.run_query("{ hello }")
"""

from __future__ import annotations

from .config import HookgraphConfig, load_config, resolve_config
from .core import (
    ContextBuildError,
    ExecutionArgs,
    GraphQLRequest,
    HookgraphError,
    HookResult,
    InstrumentationError,
    ParseError,
    Plugin,
    QueryResult,
    ResolverError,
    UnauthorizedError,
    ValidateArgs,
    ValidationError,
)
from .plugins import AuthPlugin, LoggingPlugin, TimingPlugin, ValidationCache, ValidationCachePlugin
from .runtime import GraphQLEngine, Identity, Pipeline, RequestContext, TransportInput, build_pipeline
from .server import GraphQLServer, create_app, default_plugins

__version__ = "0.1.0"

__all__ = [
    # Errors
    "HookgraphError",
    "ParseError",
    "ContextBuildError",
    "ValidationError",
    "UnauthorizedError",
    "ResolverError",
    "InstrumentationError",
    # Hook contract
    "Plugin",
    "HookResult",
    "ExecutionArgs",
    "ValidateArgs",
    "GraphQLRequest",
    "QueryResult",
    # Runtime
    "Identity",
    "RequestContext",
    "TransportInput",
    "GraphQLEngine",
    "Pipeline",
    "build_pipeline",
    # Plugins
    "AuthPlugin",
    "LoggingPlugin",
    "TimingPlugin",
    "ValidationCache",
    "ValidationCachePlugin",
    # Server
    "GraphQLServer",
    "create_app",
    "default_plugins",
    # Config
    "HookgraphConfig",
    "load_config",
    "resolve_config",
]
