"""Exception handlers rendering failures into the operation error envelope."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from forum_stage.core.errors import ErrorCode, PostApiError

logger = logging.getLogger(__name__)


async def post_api_error_handler(request: Request, exc: PostApiError) -> JSONResponse:
    """Render a typed post failure with its operation name and code."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed payloads in the same envelope, named after the route's operation."""
    op = getattr(request.scope.get("route"), "name", "")
    logger.debug("Rejected %s payload: %s", op, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"op": op, "error": ErrorCode.BAD_REQUEST.value},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the envelope handlers to ``app``."""
    app.add_exception_handler(PostApiError, post_api_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
