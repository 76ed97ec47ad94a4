"""
FastAPI router for the GraphQL endpoint.

Endpoints:
- POST /graphql - Executes a query or mutation through the pipeline

Request body:
    {"query": "...", "variables": {...}, "operationName": "..."}

The response body always has the GraphQL result shape; the status code
tells which phase failed (see HookgraphError.status_code).
"""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError as BodyValidationError

from ..core.query_types import GraphQLRequest
from ..runtime.context import TransportInput
from ..runtime.pipeline import Pipeline

logger = logging.getLogger(__name__)


def get_pipeline(request: Request) -> Pipeline:
    """Get the pipeline attached to the application."""
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        raise RuntimeError("Pipeline not initialized. Set app.state.pipeline first.")
    return pipeline


def _error_response(message: str, status_code: int = 400) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"errors": [{"message": message}]})


def create_graphql_router(path: str = "/graphql") -> APIRouter:
    """
    Create the GraphQL router.

    Args:
        path: URL path of the endpoint

    Returns:
        APIRouter to include in an application whose state holds a pipeline
    """
    router = APIRouter()

    @router.post(path)
    async def execute_graphql(
        request: Request,
        pipeline: Pipeline = Depends(get_pipeline),
    ) -> JSONResponse:
        """Execute a GraphQL request."""
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            return _error_response(f"Request body is not valid JSON: {e}")

        try:
            graphql_request = GraphQLRequest.model_validate(body)
        except BodyValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in e.errors()
            )
            return _error_response(f"Invalid GraphQL request: {details}")

        result = await pipeline.run(graphql_request, TransportInput.from_request(request))
        if result.error is not None:
            logger.debug(f"Request failed with {type(result.error).__name__}: {result.error.message}")

        return JSONResponse(status_code=result.status_code, content=result.formatted())

    return router
