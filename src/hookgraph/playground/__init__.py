"""
GraphiQL playground - interactive query UI.

Usage:
    from hookgraph.playground import mount_playground

    # Mount to FastAPI app
    mount_playground(app, path="/", api_url="/graphql")

    # Or get HTML directly
    from hookgraph.playground import get_playground_html
    html = get_playground_html(api_url="/graphql")
"""

from __future__ import annotations

import json
from typing import Optional

from fastapi import FastAPI
from fastapi.responses import HTMLResponse

GRAPHIQL_VERSION = "2.2.0"
REACT_VERSION = "18.2.0"

_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
  <title>{title}</title>
  <link href="https://unpkg.com/graphiql@{graphiql}/graphiql.min.css" rel="stylesheet" />
</head>
<body style="margin:0; height:100vh;">
  <div id="graphiql" style="height:100vh;"></div>
  <script src="https://unpkg.com/react@{react}/umd/react.production.min.js"></script>
  <script src="https://unpkg.com/react-dom@{react}/umd/react-dom.production.min.js"></script>
  <script src="https://unpkg.com/graphiql@{graphiql}/graphiql.min.js"></script>
  <script>
    const headers = Object.assign({{"Content-Type": "application/json"}}, {headers});
    const fetcher = params => fetch({api_url}, {{
      method: "POST",
      headers: headers,
      body: JSON.stringify(params)
    }}).then(res => res.json());
    ReactDOM.render(React.createElement(GraphiQL, {{ fetcher }}), document.getElementById("graphiql"));
  </script>
</body>
</html>
"""


def get_playground_html(
    *,
    api_url: str = "/graphql",
    title: str = "hookgraph",
    headers: Optional[dict[str, str]] = None,
) -> str:
    """
    Get GraphiQL HTML with injected configuration.

    Args:
        api_url: URL of the GraphQL endpoint
        title: Page title
        headers: Extra headers sent with every request

    Returns:
        HTML string
    """
    return _TEMPLATE.format(
        title=title,
        graphiql=GRAPHIQL_VERSION,
        react=REACT_VERSION,
        api_url=json.dumps(api_url),
        headers=json.dumps(headers or {}),
    )


def mount_playground(
    app: FastAPI,
    path: str = "/",
    api_url: str = "/graphql",
    headers: Optional[dict[str, str]] = None,
) -> None:
    """
    Mount GraphiQL to a FastAPI application.

    Args:
        app: FastAPI application
        path: URL path for the page (default: /)
        api_url: URL of the GraphQL endpoint
        headers: Extra headers the page sends
    """
    path = path.rstrip("/") or "/"
    html = get_playground_html(api_url=api_url, headers=headers)

    @app.get(path, response_class=HTMLResponse, include_in_schema=False)
    async def playground_html():
        """GraphiQL - interactive query UI."""
        return html


__all__ = [
    "get_playground_html",
    "mount_playground",
]
