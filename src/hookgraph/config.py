"""
Configuration loading for hookgraph servers.

Values come from ``hookgraph.yaml`` (optional) and are then overridden by
``HOOKGRAPH_*`` environment variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .plugins.auth import DEFAULT_HEADER, DEFAULT_SECRET

DEFAULT_CONFIG_PATH = "hookgraph.yaml"


@dataclass
class ServerConfig:
    """HTTP server settings."""
    host: str = "0.0.0.0"
    port: int = 8080
    graphql_path: str = "/graphql"
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:3000"])


@dataclass
class AuthConfig:
    """Static token authorization."""
    token: str = DEFAULT_SECRET
    header: str = DEFAULT_HEADER
    user_name: str = "Admin"


@dataclass
class PlaygroundConfig:
    """GraphiQL page settings."""
    enabled: bool = True
    path: str = "/"
    # Headers the page sends with every request, e.g. {"Authorization": "..."}
    headers: dict[str, str] = field(default_factory=dict)


@dataclass
class CacheConfig:
    """Validation cache settings."""
    enabled: bool = True
    max_size: Optional[int] = None


@dataclass
class LoggingConfig:
    level: str = "INFO"


@dataclass
class HookgraphConfig:
    """Main configuration."""
    server: ServerConfig = field(default_factory=ServerConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    playground: PlaygroundConfig = field(default_factory=PlaygroundConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HookgraphConfig":
        """Create config from dictionary."""
        server_data = data.get("server") or {}
        auth_data = data.get("auth") or {}
        playground_data = data.get("playground") or {}
        cache_data = data.get("cache") or {}
        logging_data = data.get("logging") or {}

        server = ServerConfig(
            host=server_data.get("host", "0.0.0.0"),
            port=int(server_data.get("port", 8080)),
            graphql_path=server_data.get("graphql_path", "/graphql"),
            cors_origins=list(server_data.get("cors_origins", ["http://localhost:3000"])),
        )
        auth = AuthConfig(
            token=auth_data.get("token", DEFAULT_SECRET),
            header=auth_data.get("header", DEFAULT_HEADER),
            user_name=auth_data.get("user_name", "Admin"),
        )
        playground = PlaygroundConfig(
            enabled=bool(playground_data.get("enabled", True)),
            path=playground_data.get("path", "/"),
            headers=dict(playground_data.get("headers") or {}),
        )
        max_size = cache_data.get("max_size")
        cache = CacheConfig(
            enabled=bool(cache_data.get("enabled", True)),
            max_size=int(max_size) if max_size is not None else None,
        )

        return cls(
            server=server,
            auth=auth,
            playground=playground,
            cache=cache,
            logging=LoggingConfig(level=str(logging_data.get("level", "INFO")).upper()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for YAML serialization."""
        return {
            "server": {
                "host": self.server.host,
                "port": self.server.port,
                "graphql_path": self.server.graphql_path,
                "cors_origins": self.server.cors_origins,
            },
            "auth": {
                "token": self.auth.token,
                "header": self.auth.header,
                "user_name": self.auth.user_name,
            },
            "playground": {
                "enabled": self.playground.enabled,
                "path": self.playground.path,
                "headers": self.playground.headers,
            },
            "cache": {
                "enabled": self.cache.enabled,
                "max_size": self.cache.max_size,
            },
            "logging": {
                "level": self.logging.level,
            },
        }

    def apply_env(self, environ: Optional[Mapping[str, str]] = None) -> "HookgraphConfig":
        """Override values from HOOKGRAPH_* environment variables (in place)."""
        env = os.environ if environ is None else environ

        if "HOOKGRAPH_HOST" in env:
            self.server.host = env["HOOKGRAPH_HOST"]
        if "HOOKGRAPH_PORT" in env:
            self.server.port = int(env["HOOKGRAPH_PORT"])
        if "HOOKGRAPH_AUTH_TOKEN" in env:
            self.auth.token = env["HOOKGRAPH_AUTH_TOKEN"]
        if "HOOKGRAPH_AUTH_HEADER" in env:
            self.auth.header = env["HOOKGRAPH_AUTH_HEADER"]
        if "HOOKGRAPH_LOG_LEVEL" in env:
            self.logging.level = env["HOOKGRAPH_LOG_LEVEL"].upper()
        if "HOOKGRAPH_CACHE_SIZE" in env:
            value = env["HOOKGRAPH_CACHE_SIZE"].strip()
            self.cache.max_size = int(value) if value else None
        if "HOOKGRAPH_PLAYGROUND" in env:
            self.playground.enabled = env["HOOKGRAPH_PLAYGROUND"].lower() in ("1", "true", "yes", "on")

        return self

    def save(self, path: Path | str = DEFAULT_CONFIG_PATH) -> None:
        """Save configuration to YAML file."""
        path = Path(path)
        content = yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        path.write_text(content)


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> HookgraphConfig | None:
    """Load configuration from YAML file, None if it does not exist."""
    path = Path(path)
    if not path.exists():
        return None

    data = yaml.safe_load(path.read_text()) or {}
    return HookgraphConfig.from_dict(data)


def resolve_config(path: Path | str = DEFAULT_CONFIG_PATH, environ: Optional[Mapping[str, str]] = None) -> HookgraphConfig:
    """File config (or defaults) with environment overrides applied."""
    config = load_config(path) or HookgraphConfig()
    return config.apply_env(environ)


def configure_logging(level: str = "INFO") -> None:
    """Console logging for the CLI and server."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
