"""FastAPI application for the Anvaya sales-lead tracker."""
from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .core.config import settings
from .core.logging import configure_logging
from .routers import agents, leads, reports, tags

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Anvaya API", version=__version__)

if settings.cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.exception_handler(StarletteHTTPException)
async def http_exc_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as ``{"error": ...}``."""

    if isinstance(exc.detail, dict):
        content = exc.detail
    else:
        content = {"error": exc.detail or "HTTP error"}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exc_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparseable request data as 400 with per-field violations."""

    violations = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        violations.append({"field": field, "message": f"Invalid input: '{field}': {error.get('msg', 'invalid value')}."})

    message = violations[0]["message"] if violations else "Invalid input."
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message, "violations": violations},
    )


@app.exception_handler(Exception)
async def unhandled_exc_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": "Internal server error"})


@app.get("/", response_class=PlainTextResponse, tags=["meta"])
async def index() -> PlainTextResponse:
    return PlainTextResponse("Welcome to Anvaya app!!")


@app.get("/health", tags=["meta"])
async def health() -> dict[str, str]:
    """Simple liveness probe."""

    return {"status": "ok"}


@app.head("/health", tags=["meta"])
async def health_head() -> Response:
    """Allow HEAD for uptime monitors that only need the status code."""

    return Response(status_code=200)


app.include_router(agents.router, prefix="/agents", tags=["agents"])
app.include_router(leads.router, prefix="/leads", tags=["leads"])
app.include_router(tags.router, prefix="/tags", tags=["tags"])
app.include_router(reports.router, prefix="/report", tags=["reports"])


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""

    logger.info("Starting Anvaya API on %s:%s (%s)", settings.host, settings.port, settings.app_env)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
