"""
Stock Provider Gateway - FastAPI Application

Main entry point for the backend API. Use `create_app()` (uvicorn factory
mode) to build an application with its provider clients.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import router as api_router
from app.core.config import Settings, get_settings
from app.services.providers import MarketstackClient, PolygonClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    for client in (app.state.polygon, app.state.marketstack):
        if not client.is_configured:
            logger.warning(f"{client.name} API key not found - its routes will return errors")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await app.state.polygon.close()
    await app.state.marketstack.close()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {error, details?} instead of FastAPI's {detail}."""
    if isinstance(exc.detail, dict):
        content = exc.detail
    elif exc.status_code in (404, 405):
        # Unknown path or unsupported method on a known path
        return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
    else:
        content = {"error": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"error": "Invalid request parameters", "details": jsonable_encoder(exc.errors())},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Server error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    polygon: Optional[PolygonClient] = None,
    marketstack: Optional[MarketstackClient] = None,
) -> FastAPI:
    """
    Build the application.

    Provider clients default to ones built from `settings`; tests pass
    their own.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
        Normalized end-of-day stock quotes from Marketstack and Polygon.io.

        ## Endpoints
        - **/api/polygon/{symbol}**: Polygon.io previous close
        - **/api/marketstack/{symbol}**: Marketstack latest end-of-day record
        - **/api/test/{symbol}**: both providers, partial failures reported per provider
        - **/api/health**: process status and configured provider keys
        """,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.settings = settings
    app.state.polygon = polygon or PolygonClient.from_settings(settings)
    app.state.marketstack = marketstack or MarketstackClient.from_settings(settings)

    allow_all = "*" in settings.cors_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_origins,
        allow_credentials=not allow_all,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(api_router, prefix="/api")

    return app
