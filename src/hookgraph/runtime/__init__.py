"""
Runtime module - query execution pipeline.
"""

from __future__ import annotations

from .context import Identity, RequestContext, TransportInput
from .engine import GraphQLEngine
from .pipeline import Pipeline, build_pipeline

__all__ = [
    "Identity",
    "RequestContext",
    "TransportInput",
    "GraphQLEngine",
    "Pipeline",
    "build_pipeline",
]
