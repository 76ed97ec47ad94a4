"""
hookgraph server - main entry point for creating an application.

Usage:
    from hookgraph import GraphQLServer

    server = GraphQLServer()  # demo schema, default plugins
    app = server.app

    # Custom schema and plugins
    server = GraphQLServer(
        schema=my_schema,
        root_value=my_root,
        plugins=[ValidationCachePlugin(), TimingPlugin(), MyPlugin()],
    )
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from graphql import GraphQLSchema

from .api import create_graphql_router
from .config import HookgraphConfig
from .demo import build_demo_schema, build_root_value
from .playground import mount_playground
from .plugins import AuthPlugin, LoggingPlugin, TimingPlugin, ValidationCache, ValidationCachePlugin
from .runtime.context import Identity
from .runtime.pipeline import Pipeline, build_pipeline

logger = logging.getLogger(__name__)


def default_plugins(config: Optional[HookgraphConfig] = None) -> list[Any]:
    """
    Reference plugins in registration order: cache, timing, logging, auth.

    Auth is registered last so its execute hook runs after the timing and
    logging before-hooks; an auth abort therefore skips their after-hooks.
    """
    config = config or HookgraphConfig()
    plugins: list[Any] = []

    if config.cache.enabled:
        plugins.append(ValidationCachePlugin(ValidationCache(max_size=config.cache.max_size)))

    plugins.append(TimingPlugin())
    plugins.append(LoggingPlugin())
    plugins.append(
        AuthPlugin(
            secret=config.auth.token,
            header=config.auth.header,
            identity=Identity(name=config.auth.user_name, roles=("admin",)),
        )
    )
    return plugins


class GraphQLServer:
    """
    GraphQL server wrapping a pipeline in a FastAPI application.

    Features:
    - POST endpoint executing requests through the plugin pipeline
    - GraphiQL playground
    - Health check
    """

    def __init__(
        self,
        config: Optional[HookgraphConfig] = None,
        *,
        schema: Optional[GraphQLSchema] = None,
        root_value: Any = None,
        plugins: Optional[Iterable[Any]] = None,
        title: str = "hookgraph",
    ):
        """
        Initialize server.

        Args:
            config: Server configuration (default: HookgraphConfig())
            schema: GraphQL schema (default: demo schema)
            root_value: Root resolvers (default: demo resolvers when schema is omitted)
            plugins: Plugins in registration order (default: default_plugins(config))
            title: FastAPI app title
        """
        self.config = config or HookgraphConfig()
        self.title = title

        if schema is None:
            schema = build_demo_schema()
            if root_value is None:
                root_value = build_root_value()

        self.plugins = list(plugins) if plugins is not None else default_plugins(self.config)
        self.pipeline: Pipeline = build_pipeline(self.plugins, schema=schema, root_value=root_value)

        self.app = self._create_app()
        self.app.state.pipeline = self.pipeline
        self.app.state.server = self

    def _create_app(self) -> FastAPI:
        """Create FastAPI application."""
        app = FastAPI(
            title=self.title,
            description="GraphQL over HTTP with a pluggable execution pipeline",
            version="1.0.0",
        )

        app.add_middleware(
            CORSMiddleware,
            allow_origins=self.config.server.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        app.include_router(create_graphql_router(self.config.server.graphql_path))

        @app.get("/health")
        async def health():
            return {"status": "ok"}

        if self.config.playground.enabled:
            mount_playground(
                app,
                path=self.config.playground.path,
                api_url=self.config.server.graphql_path,
                headers=self.config.playground.headers,
            )

        plugin_names = ", ".join(type(p).__name__ for p in self.plugins) or "none"
        logger.info(f"GraphQL endpoint at {self.config.server.graphql_path} (plugins: {plugin_names})")

        return app


def create_app(config: Optional[HookgraphConfig] = None, **kwargs: Any) -> FastAPI:
    """Create a FastAPI application (see GraphQLServer for arguments)."""
    return GraphQLServer(config, **kwargs).app
