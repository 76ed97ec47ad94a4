"""
Demo module - sample schema used by the default server.
"""

from __future__ import annotations

from .schema import SDL, USERS, build_demo_schema, build_root_value

__all__ = ["SDL", "USERS", "build_demo_schema", "build_root_value"]
