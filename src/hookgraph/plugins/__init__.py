"""
Plugins module - reference pipeline plugins.
"""

from __future__ import annotations

from .auth import AuthPlugin
from .request_logging import LoggingPlugin
from .timing import TimingPlugin
from .validation_cache import ValidationCache, ValidationCachePlugin, validation_key

__all__ = [
    "AuthPlugin",
    "LoggingPlugin",
    "TimingPlugin",
    "ValidationCache",
    "ValidationCachePlugin",
    "validation_key",
]
