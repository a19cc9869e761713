from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

from src.application.errors import ApiError

logger = logging.getLogger(__name__)


def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    """Render the field-keyed error map as the response body."""
    logger.debug("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.errors)
    return JSONResponse(status_code=exc.status_code, content=exc.errors)


def add_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)


def add_default_middlewares(app: FastAPI) -> None:
    # CORS configuration
    # Development allows the local frontend dev servers, production is open
    env = os.getenv("ENV", "development")

    if env in ("development", "staging"):
        allowed_origins = [
            "http://localhost:3000",
            "http://localhost:5000",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5000",
        ]
    else:
        allowed_origins = ["*"]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
