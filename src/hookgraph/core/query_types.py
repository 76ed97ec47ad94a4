"""
Request and result types at the pipeline boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from graphql import ExecutionResult
from pydantic import BaseModel, ConfigDict, Field

from .errors import HookgraphError


class GraphQLRequest(BaseModel):
    """
    JSON body of a GraphQL request.

    Example:
    {
        "query": "query GetUser($id: ID!) { user(id: $id) { name } }",
        "variables": {"id": "2"},
        "operationName": "GetUser"
    }
    """
    model_config = ConfigDict(populate_by_name=True)

    query: str
    variables: Optional[dict[str, Any]] = None
    operation_name: Optional[str] = Field(default=None, alias="operationName")


@dataclass
class QueryResult:
    """
    Final result of one request.

    ``executed`` is True once the engine ran the document; only then is
    ``data`` part of the response. ``error`` holds the terminal pipeline
    error when the request stopped before or instead of execution.
    """
    data: Optional[dict[str, Any]] = None
    errors: list[dict[str, Any]] = field(default_factory=list)
    executed: bool = False
    error: Optional[HookgraphError] = None

    @classmethod
    def from_error(cls, error: HookgraphError) -> "QueryResult":
        return cls(errors=error.formatted(), error=error)

    @classmethod
    def from_execution(cls, result: ExecutionResult) -> "QueryResult":
        errors = [e.formatted for e in result.errors or []]
        return cls(data=result.data, errors=errors, executed=True)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def status_code(self) -> int:
        return self.error.status_code if self.error is not None else 200

    def formatted(self) -> dict[str, Any]:
        """Serializable response body."""
        response: dict[str, Any] = {}
        if self.executed:
            response["data"] = self.data
        if self.errors:
            response["errors"] = self.errors
        return response
