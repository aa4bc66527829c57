"""
main.py
-------
FastAPI application factory and entry point.

Application lifecycle:
  1. App is created by create_application().
  2. lifespan context manager runs on startup / shutdown.
  3. Routers are registered with their URL prefixes.
  4. Exception handlers render every failure as {"message": ...}
     (plus "errors" for validation failures).

Run with:
    uvicorn main:app --reload              # development
    uvicorn main:app --workers 4           # production (no --reload)
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Sequence

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from reviewdesk.api.routes import auth, clients, dashboard, review_requests, testimonials
from reviewdesk.core.config import settings
from reviewdesk.core.exceptions import AppError, AuthError, RepositoryError, field_error
from reviewdesk.core.logging import configure_logging, get_logger
from reviewdesk.db.session import engine

logger = get_logger(__name__)

# Leading loc segment FastAPI adds to say where a bad value came from
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Startup / shutdown lifecycle hook.

    Startup:
      - Configure structured logging

    Shutdown:
      - Dispose the async engine (graceful connection pool drain)
    """
    configure_logging()
    logger.info(
        "Starting up",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        debug=settings.DEBUG,
        auth_mode=settings.AUTH_VERIFY_MODE,
    )
    yield
    logger.info("Shutting down, disposing DB engine")
    await engine.dispose()


def _field_path(loc: Sequence[Any]) -> list:
    if loc and loc[0] in _LOCATION_PREFIXES:
        return list(loc[1:])
    return list(loc)


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Review-collection backend for real-estate agents: clients, "
            "review requests and testimonials, isolated per agent."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(clients.router)
    app.include_router(review_requests.router)
    app.include_router(testimonials.router)
    app.include_router(dashboard.router)

    # ── Exception Handlers ────────────────────────────────────────────────────

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        headers = None
        if isinstance(exc, RepositoryError):
            logger.error(
                "Storage error",
                path=request.url.path,
                method=request.method,
                error=str(exc),
                exc_info=exc,
            )
        elif isinstance(exc, AuthError) and exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_body(),
            headers=headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            field_error(_field_path(err.get("loc", ())), err.get("msg", ""), err.get("type", ""))
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation failed", "errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )

    # ── Health Check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["Health"], summary="Service health check")
    async def health() -> dict:
        return {"ok": True}

    return app


app = create_application()
