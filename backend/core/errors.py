"""
Exception handlers shared by the app and the tests.

HTTP errors keep the {"error", "code", "details"} shape. Provider failures
(embedding, vector store, completion) surface as 502 without retry.
"""
import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail if isinstance(exc.detail, str) else "Error",
            "code": f"HTTP_{exc.status_code}",
            "details": exc.detail if isinstance(exc.detail, dict) else None
        },
        headers=getattr(exc, "headers", None),
    )


async def upstream_exception_handler(request: Request, exc: httpx.HTTPError):
    logger.error(f"Upstream provider call failed: {type(exc).__name__}: {exc}")
    return JSONResponse(
        status_code=502,
        content={"error": "Upstream provider error", "code": "UPSTREAM_ERROR", "details": None}
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(httpx.HTTPError, upstream_exception_handler)
