"""
Main entrypoint for the Formula Finder API.

This module assembles the FastAPI application, sets up logging,
registers the error envelope handlers and includes versioned routers.
The application is instantiated at import time as ``app`` so it can be
served directly::

    uvicorn formula_finder_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import init_db
from .core.errors import ActionError, ValidationFailedError
from .core.logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Apply migrations at startup.  This creates the database file if it
    # does not exist and brings the schema up to date.
    init_db()
    yield


async def action_error_handler(request: Request, exc: ActionError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    issues = [
        {"loc": [str(part) for part in err.get("loc", ())], "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    error = ValidationFailedError("; ".join(issue["message"] for issue in issues) or None)
    content = error.to_dict()
    content["error"]["issues"] = issues
    logging.getLogger(__name__).debug("Rejected %s %s: %s", request.method, request.url.path, issues)
    return JSONResponse(status_code=error.status_code, content=content)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that startup can log.
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.add_exception_handler(ActionError, action_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.include_router(v1_router, prefix="/api/v1")
    return app


app = create_app()
