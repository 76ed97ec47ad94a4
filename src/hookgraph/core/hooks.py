"""
Hook contract between the pipeline and its plugins.

A plugin is any object that defines one or more of these hooks:

    on_context_building(context, transport) -> None
    on_validate(args: ValidateArgs) -> Optional[ValidateDone]
    on_execute(args: ExecutionArgs) -> None | ExecuteDone | HookResult

Hooks may be plain functions or coroutines. ``Plugin`` is a convenience
base class; the pipeline only looks at which hook attributes exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Optional, Union

from graphql import DocumentNode, GraphQLError, GraphQLSchema

if TYPE_CHECKING:
    from ..runtime.context import RequestContext
    from .query_types import QueryResult


ExecuteDone = Callable[["QueryResult"], Union[None, Awaitable[None]]]
ValidateDone = Callable[[list[GraphQLError]], Union[None, Awaitable[None]]]


class Plugin:
    """
    Base class for pipeline plugins.

    Subclasses implement only the hooks they need. Instances are registered
    once, in order, and must not keep per-request state on ``self``.
    """

    name: Optional[str] = None

    def get_name(self) -> str:
        """Return the plugin name used in logs and errors."""
        return self.name or self.__class__.__name__


def plugin_name(plugin: Any) -> str:
    """Name of a plugin, whether or not it derives from ``Plugin``."""
    getter = getattr(plugin, "get_name", None)
    if callable(getter):
        return getter()
    return getattr(plugin, "__name__", plugin.__class__.__name__)


@dataclass(frozen=True)
class ExecutionArgs:
    """Immutable snapshot handed to the execute phase."""
    schema: GraphQLSchema
    document: DocumentNode
    context_value: "RequestContext"
    root_value: Any = None
    variable_values: Optional[dict[str, Any]] = None
    operation_name: Optional[str] = None


@dataclass
class ValidateArgs:
    """
    Arguments of the validate phase.

    A hook that already knows the outcome calls ``set_result`` and the
    validator is skipped.
    """
    schema: GraphQLSchema
    document: DocumentNode
    result: Optional[list[GraphQLError]] = field(default=None, init=False)

    def set_result(self, errors: list[GraphQLError]) -> None:
        self.result = list(errors)

    @property
    def has_result(self) -> bool:
        return self.result is not None


@dataclass(frozen=True)
class HookResult:
    """
    Outcome of an ``on_execute`` hook.

    Either proceed (optionally registering an after-hook) or abort the whole
    execution with an error.
    """
    on_done: Optional[ExecuteDone] = None
    error: Optional[BaseException] = None

    @classmethod
    def proceed(cls, on_done: Optional[ExecuteDone] = None) -> "HookResult":
        return cls(on_done=on_done)

    @classmethod
    def abort(cls, error: BaseException) -> "HookResult":
        return cls(error=error)

    @property
    def aborted(self) -> bool:
        return self.error is not None


def coerce_hook_result(value: Any) -> HookResult:
    """Normalize whatever an on_execute hook returned into a HookResult."""
    if value is None:
        return HookResult.proceed()
    if isinstance(value, HookResult):
        return value
    if callable(value):
        return HookResult.proceed(value)
    raise TypeError(f"on_execute must return None, a callable or HookResult, got {type(value).__name__}")
