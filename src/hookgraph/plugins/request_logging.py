"""
Logging plugin - logs incoming operations and their outcome.
"""

from __future__ import annotations

import logging

from ..core.hooks import ExecuteDone, ExecutionArgs, Plugin
from ..core.query_types import QueryResult
from ..runtime.engine import operation_label

logger = logging.getLogger(__name__)


class LoggingPlugin(Plugin):
    """
    Structured request logging.

    Records:
    - graphql.request: before execution, with the operation name
    - graphql.error: after execution when the result has errors
    - graphql.success: after execution otherwise
    """

    name = "logging"

    def on_execute(self, args: ExecutionArgs) -> ExecuteDone:
        operation = operation_label(args.operation_name)
        logger.info(
            f"Incoming GraphQL request: {operation}",
            extra={"event": "graphql.request", "operation": operation},
        )

        def on_execute_done(result: QueryResult) -> None:
            if result.has_errors:
                logger.error(
                    f"GraphQL [{operation}] errors: {result.errors}",
                    extra={"event": "graphql.error", "operation": operation, "errors": result.errors},
                )
            else:
                logger.info(
                    f"GraphQL [{operation}] executed successfully",
                    extra={"event": "graphql.success", "operation": operation},
                )

        return on_execute_done
