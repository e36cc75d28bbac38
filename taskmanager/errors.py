"""
Task Manager API - Error Handling

Last-resort handler so unexpected failures still produce a JSON body.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from taskmanager.config import settings

logger = logging.getLogger(__name__)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback and return a generic 500 response."""
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
    )
    content = {"detail": "Server error"}
    if settings.DEBUG:
        content["error"] = str(exc) or type(exc).__name__
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(Exception, unhandled_exception_handler)
