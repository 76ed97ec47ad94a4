"""
hookgraph CLI - Command line tools for running and querying a server.
"""

from __future__ import annotations

from .main import app, main

__all__ = ["main", "app"]
