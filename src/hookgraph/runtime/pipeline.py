"""
Pipeline engine - runs one GraphQL request through the registered plugins.

Phases:
1. build_context: on_context_building hooks, registration order, fail-fast
2. parse: query text -> document
3. validate: on_validate hooks may supply a cached outcome
4. execute: on_execute before-hooks in order, engine execute, then the
   collected after-hooks in reverse order

The engine only knows hook shapes and ordering, never what a plugin does.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from graphql import DocumentNode, GraphQLSchema

from ..core.errors import (
    ContextBuildError,
    HookgraphError,
    InstrumentationError,
    ValidationError,
)
from ..core.hooks import (
    ExecuteDone,
    ExecutionArgs,
    HookResult,
    ValidateArgs,
    coerce_hook_result,
    plugin_name,
)
from ..core.query_types import GraphQLRequest, QueryResult
from .context import RequestContext, TransportInput
from .engine import GraphQLEngine, maybe_await

logger = logging.getLogger(__name__)


class Pipeline:
    """
    Executes queries end-to-end around an ordered, immutable plugin list.

    Usage:
        pipeline = build_pipeline([cache, timing, logger, auth], schema=schema, root_value=root)
        result = await pipeline.run(GraphQLRequest(query="{ hello }"), transport)
        response = result.formatted()
    """

    def __init__(
        self,
        plugins: Iterable[Any],
        *,
        schema: GraphQLSchema,
        root_value: Any = None,
        engine: Optional[GraphQLEngine] = None,
    ):
        """
        Initialize pipeline.

        Args:
            plugins: Plugins in registration order
            schema: Schema every request is validated and executed against
            root_value: Root resolver set
            engine: Schema engine (default: graphql-core)
        """
        self.plugins = tuple(plugins)
        self.schema = schema
        self.root_value = root_value
        self.engine = engine or GraphQLEngine()

        # Hooks are snapshotted once; registration is immutable afterwards
        self._context_hooks = self._collect("on_context_building")
        self._validate_hooks = self._collect("on_validate")
        self._execute_hooks = self._collect("on_execute")

    def _collect(self, hook_name: str) -> tuple[tuple[str, Callable], ...]:
        """Collect (plugin name, bound hook) pairs for plugins defining a hook."""
        hooks = []
        for plugin in self.plugins:
            hook = getattr(plugin, hook_name, None)
            if callable(hook):
                hooks.append((plugin_name(plugin), hook))
        return tuple(hooks)

    async def build_context(self, transport: TransportInput) -> RequestContext:
        """
        Create a fresh context and let every plugin fill it in.

        Raises:
            ContextBuildError: On the first failing hook; later hooks do not run
        """
        context = RequestContext(transport=transport)
        for name, hook in self._context_hooks:
            try:
                await maybe_await(hook(context, transport))
            except Exception as e:
                logger.warning(f"on_context_building failed in {name}: {e}", exc_info=True)
                raise ContextBuildError(name, str(e)) from e
        return context

    def parse(self, query: str) -> DocumentNode:
        """Parse query text. Raises ParseError on malformed input."""
        return self.engine.parse(query)

    async def validate(self, document: DocumentNode) -> None:
        """
        Validate a document, letting plugins short-circuit the validator.

        The first hook that calls ``args.set_result`` ends the hook loop and
        the validator is not run. Validate-done callbacks run in reverse order.

        Raises:
            ValidationError: If the outcome contains errors
        """
        args = ValidateArgs(schema=self.schema, document=document)
        done_stack: list[tuple[str, Callable]] = []

        for name, hook in self._validate_hooks:
            on_done = await maybe_await(hook(args))
            if on_done is not None:
                done_stack.append((name, on_done))
            if args.has_result:
                logger.debug(f"Validation result supplied by {name}")
                break

        if args.has_result:
            errors = args.result
        else:
            errors = self.engine.validate(self.schema, document)

        while done_stack:
            name, on_done = done_stack.pop()
            await self._run_after_hook(name, "on_validate_done", on_done, list(errors))

        if errors:
            raise ValidationError(errors)

    async def execute(self, args: ExecutionArgs) -> QueryResult:
        """
        Run before-hooks, execute, then run after-hooks in reverse order.

        A before-hook aborts by returning ``HookResult.abort(error)`` or by
        raising. An abort is terminal: no resolver runs and none of the
        after-hooks collected so far run.
        """
        after_hooks: list[tuple[str, ExecuteDone]] = []

        for name, hook in self._execute_hooks:
            try:
                outcome = coerce_hook_result(await maybe_await(hook(args)))
            except Exception as e:
                outcome = HookResult.abort(e)

            if outcome.aborted:
                error = _as_pipeline_error(outcome.error)
                logger.info(f"Execution aborted by {name}: {error.message}")
                return QueryResult.from_error(error)

            if outcome.on_done is not None:
                after_hooks.append((name, outcome.on_done))

        result = QueryResult.from_execution(await self.engine.execute(args))

        while after_hooks:
            name, on_done = after_hooks.pop()
            await self._run_after_hook(name, "on_execute_done", on_done, result)

        return result

    async def _run_after_hook(self, name: str, hook: str, callback: Callable, payload: Any) -> None:
        """Invoke an after-hook; failures are logged and never propagate."""
        try:
            await maybe_await(callback(payload))
        except Exception as e:
            error = InstrumentationError(name, hook, e)
            logger.error(error.message, exc_info=True)

    async def run(self, request: GraphQLRequest, transport: TransportInput) -> QueryResult:
        """
        Run a request through every phase.

        Never raises: every terminal failure becomes a result with ``errors``.
        """
        try:
            context = await self.build_context(transport)
            document = self.parse(request.query)
            await self.validate(document)

            args = ExecutionArgs(
                schema=self.schema,
                document=document,
                context_value=context,
                root_value=self.root_value,
                variable_values=request.variables,
                operation_name=request.operation_name,
            )
            return await self.execute(args)

        except HookgraphError as e:
            return QueryResult.from_error(e)
        except Exception as e:
            logger.error(f"Unexpected pipeline failure: {e}", exc_info=True)
            return QueryResult.from_error(HookgraphError(str(e)))

    async def run_query(
        self,
        query: str,
        *,
        variables: Optional[dict[str, Any]] = None,
        operation_name: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> QueryResult:
        """Convenience wrapper for callers without an HTTP request."""
        request = GraphQLRequest(query=query, variables=variables, operationName=operation_name)
        return await self.run(request, TransportInput(headers=dict(headers or {})))


def _as_pipeline_error(error: BaseException) -> HookgraphError:
    if isinstance(error, HookgraphError):
        return error
    return HookgraphError(str(error))


def build_pipeline(
    plugins: Iterable[Any],
    *,
    schema: GraphQLSchema,
    root_value: Any = None,
    engine: Optional[GraphQLEngine] = None,
) -> Pipeline:
    """Create a pipeline from plugins in registration order."""
    return Pipeline(plugins, schema=schema, root_value=root_value, engine=engine)
