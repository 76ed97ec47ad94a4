"""
Timing plugin - logs how long each execution took.
"""

from __future__ import annotations

import logging
import time

from ..core.hooks import ExecuteDone, ExecutionArgs, Plugin
from ..core.query_types import QueryResult
from ..runtime.engine import operation_label

logger = logging.getLogger(__name__)


class TimingPlugin(Plugin):
    """Emit a ``graphql.timing`` record per executed operation."""

    name = "timing"

    def on_execute(self, args: ExecutionArgs) -> ExecuteDone:
        start = time.perf_counter()
        operation = operation_label(args.operation_name)

        def on_execute_done(result: QueryResult) -> None:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.info(
                f"GraphQL [{operation}] executed in {duration_ms:.2f}ms",
                extra={"event": "graphql.timing", "operation": operation, "duration_ms": duration_ms},
            )

        return on_execute_done
