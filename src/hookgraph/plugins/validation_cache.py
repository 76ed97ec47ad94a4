"""
Validation cache plugin.

Skips validating a document that was already validated against the same
schema. The cache itself is an explicit component so each pipeline (and
each test) can own its own instance.

Usage:
    cache = ValidationCache(max_size=1000)
    pipeline = build_pipeline([ValidationCachePlugin(cache), ...], schema=schema)
"""

from __future__ import annotations

import hashlib
import logging
import threading
from collections import OrderedDict
from typing import Optional

from graphql import DocumentNode, GraphQLError, GraphQLSchema, print_ast, print_schema

from ..core.hooks import Plugin, ValidateArgs, ValidateDone

logger = logging.getLogger(__name__)


def schema_fingerprint(schema: GraphQLSchema) -> str:
    """Stable digest of a schema's SDL."""
    return hashlib.sha256(print_schema(schema).encode("utf-8")).hexdigest()


def document_fingerprint(document: DocumentNode) -> str:
    """
    Digest of the document's source text.

    Cached errors carry locations into that text, so only an identical
    source may share an entry. Documents built without location info fall
    back to the printed AST.
    """
    loc = document.loc
    text = loc.source.body if loc is not None else print_ast(document)
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def validation_key(schema: GraphQLSchema, document: DocumentNode) -> str:
    """Cache key for (schema, document)."""
    return f"{schema_fingerprint(schema)}:{document_fingerprint(document)}"


class ValidationCache:
    """
    In-process store of validation outcomes.

    Unbounded by default. With ``max_size`` set, the least recently used
    entry is evicted on insert.
    """

    def __init__(self, max_size: Optional[int] = None):
        """
        Initialize cache.

        Args:
            max_size: Maximum number of entries (None = unbounded)
        """
        if max_size is not None and max_size <= 0:
            raise ValueError("max_size must be positive")
        self.max_size = max_size
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[str, tuple[GraphQLError, ...]] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[list[GraphQLError]]:
        """Get cached errors for key (empty list = valid), None on miss."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            self._entries.move_to_end(key)
            self.hits += 1
            return list(entry)

    def set(self, key: str, errors: list[GraphQLError]) -> None:
        """Store a validation outcome."""
        with self._lock:
            self._entries[key] = tuple(errors)
            self._entries.move_to_end(key)
            if self.max_size is not None:
                while len(self._entries) > self.max_size:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug(f"Validation cache evicted {evicted}")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class ValidationCachePlugin(Plugin):
    """Serve validation outcomes from a ValidationCache."""

    name = "validation_cache"

    def __init__(self, cache: Optional[ValidationCache] = None):
        self.cache = cache if cache is not None else ValidationCache()
        # Digest of the last schema seen; a pipeline validates against one schema
        self._schema: Optional[GraphQLSchema] = None
        self._schema_digest = ""

    def _key(self, schema: GraphQLSchema, document: DocumentNode) -> str:
        if schema is not self._schema:
            self._schema_digest = schema_fingerprint(schema)
            self._schema = schema
        return f"{self._schema_digest}:{document_fingerprint(document)}"

    def on_validate(self, args: ValidateArgs) -> Optional[ValidateDone]:
        key = self._key(args.schema, args.document)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"Validation cache HIT: {key}")
            args.set_result(cached)
            return None

        logger.debug(f"Validation cache MISS: {key}")

        def on_validate_done(errors: list[GraphQLError]) -> None:
            self.cache.set(key, errors)

        return on_validate_done
