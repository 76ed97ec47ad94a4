#!/usr/bin/env python3
"""
hookgraph CLI - Main entry point.

Usage:
    hookgraph init                                  # Write default hookgraph.yaml
    hookgraph serve                                 # Run the HTTP server
    hookgraph query '{ hello }' --token 'Bearer ...'  # Run a query in-process
    hookgraph query '{ hello }' --url http://localhost:8080/graphql
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

import httpx

from ..config import DEFAULT_CONFIG_PATH, HookgraphConfig, configure_logging, resolve_config


def cmd_init(args: argparse.Namespace) -> int:
    """Write a default configuration file."""
    config_path = Path(args.config)

    if config_path.exists() and not args.force:
        print(f"Error: {config_path} already exists. Use --force to overwrite.")
        return 1

    HookgraphConfig().save(config_path)
    print(f"Created {config_path}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the HTTP server."""
    import uvicorn

    from ..server import GraphQLServer

    config = resolve_config(args.config)
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port

    configure_logging(config.logging.level)
    server = GraphQLServer(config)

    print(f"Server running at http://{config.server.host}:{config.server.port}/")
    uvicorn.run(
        server.app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )
    return 0


def _parse_variables(raw: Optional[str]) -> Optional[dict[str, Any]]:
    if not raw:
        return None
    variables = json.loads(raw)
    if not isinstance(variables, dict):
        raise ValueError("variables must be a JSON object")
    return variables


def cmd_query(args: argparse.Namespace) -> int:
    """Execute a query and print the JSON result."""
    config = resolve_config(args.config)
    configure_logging(config.logging.level)

    try:
        variables = _parse_variables(args.variables)
    except ValueError as e:
        print(f"Error: invalid --variables: {e}")
        return 1

    headers = {config.auth.header: args.token} if args.token else {}

    if args.url:
        payload: dict[str, Any] = {"query": args.query}
        if variables is not None:
            payload["variables"] = variables
        if args.operation_name:
            payload["operationName"] = args.operation_name
        try:
            response = httpx.post(args.url, json=payload, headers=headers, timeout=args.timeout)
        except httpx.HTTPError as e:
            print(f"Error: request to {args.url} failed: {e}")
            return 1
        try:
            body = response.json()
        except ValueError:
            print(f"Error: {args.url} returned {response.status_code} with a non-JSON body")
            return 1
    else:
        from ..server import GraphQLServer

        pipeline = GraphQLServer(config).pipeline
        result = asyncio.run(
            pipeline.run_query(
                args.query,
                variables=variables,
                operation_name=args.operation_name,
                headers=headers,
            )
        )
        body = result.formatted()

    print(json.dumps(body, indent=2, ensure_ascii=False))
    return 1 if body.get("errors") else 0


def create_parser() -> argparse.ArgumentParser:
    """Create CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="hookgraph",
        description="hookgraph - GraphQL server with a pluggable execution pipeline",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Path to hookgraph.yaml")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # init
    init_parser = subparsers.add_parser("init", help="Write default configuration")
    init_parser.add_argument("--force", "-f", action="store_true", help="Overwrite existing config")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP server")
    serve_parser.add_argument("--host", help="Bind host")
    serve_parser.add_argument("--port", "-p", type=int, help="Bind port")

    # query
    query_parser = subparsers.add_parser("query", help="Execute a query")
    query_parser.add_argument("query", help="GraphQL query text")
    query_parser.add_argument("--variables", "-v", help="Variables as a JSON object")
    query_parser.add_argument("--operation-name", "-o", dest="operation_name", help="Operation to run")
    query_parser.add_argument("--token", "-t", help="Value of the authorization header")
    query_parser.add_argument("--url", help="Send to a running server instead of running in-process")
    query_parser.add_argument("--timeout", type=float, default=10.0, help="HTTP timeout in seconds")

    return parser


def app(args: Optional[List[str]] = None) -> int:
    """Main CLI application."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if not parsed.command:
        parser.print_help()
        return 0

    commands = {
        "init": cmd_init,
        "serve": cmd_serve,
        "query": cmd_query,
    }

    handler = commands.get(parsed.command)
    if handler:
        return handler(parsed)

    parser.print_help()
    return 1


def main() -> None:
    """Entry point for CLI."""
    sys.exit(app())


if __name__ == "__main__":
    main()
