"""
Schema engine - thin wrapper around graphql-core.

The pipeline never calls graphql-core directly; it goes through an engine
so tests can count or replace validation and execution work.
"""

from __future__ import annotations

import inspect
from typing import Any, Optional

from graphql import (
    DocumentNode,
    ExecutionResult,
    GraphQLError,
    GraphQLSchema,
    GraphQLSyntaxError,
    execute,
    parse,
    validate,
)

from ..core.errors import ParseError
from ..core.hooks import ExecutionArgs


class GraphQLEngine:
    """
    Parse, validate and execute against a graphql-core schema.

    Usage:
        engine = GraphQLEngine()
        document = engine.parse("{ hello }")
        errors = engine.validate(schema, document)
        result = await engine.execute(args)
    """

    def parse(self, source: str) -> DocumentNode:
        """
        Parse query text.

        Raises:
            ParseError: If the text is not a valid document
        """
        try:
            return parse(source)
        except GraphQLSyntaxError as e:
            raise ParseError(e.message, source_error=e) from e

    def validate(self, schema: GraphQLSchema, document: DocumentNode) -> list[GraphQLError]:
        """Validate a document and return the list of errors (empty when valid)."""
        return validate(schema, document)

    async def execute(self, args: ExecutionArgs) -> ExecutionResult:
        """Execute a validated document, awaiting async resolvers."""
        result = execute(
            args.schema,
            args.document,
            root_value=args.root_value,
            context_value=args.context_value,
            variable_values=args.variable_values,
            operation_name=args.operation_name,
        )
        if inspect.isawaitable(result):
            result = await result
        return result


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if it is awaitable, else return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


def operation_label(operation_name: Optional[str]) -> str:
    """Operation name for observations, ``anonymous`` when unnamed."""
    return operation_name or "anonymous"
