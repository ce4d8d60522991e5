"""Bookstore Catalog API: FastAPI entry point.

Builds the app around one explicitly constructed Database handle, which is
opened in the lifespan and disposed on shutdown. Registers middleware, the
catalog router and the global 404/500 handlers.
"""

import traceback
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.middleware import RequestContextMiddleware
from catalog.router import router as catalog_router
from core.config import Settings
from core.database import Database
from core.errors import TransportError
from core.logging import configure_logging

VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Global error handlers
# ---------------------------------------------------------------------------

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unmatched routes and other HTTP errors raised outside the catalog handlers."""
    if exc.status_code == 404:
        message = f"Not Found - {request.url.path}"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Invalid request",
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log, then hide internals unless running in development."""
    logger.opt(exception=exc).error("Unhandled error on {} {}", request.method, request.url.path)

    content: dict = {"success": False, "message": "Internal Server Error"}
    if request.app.state.settings.is_development:
        content["message"] = str(exc) or content["message"]
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=500, content=content)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the API. Tests pass their own settings and Database."""
    settings = settings or Settings.from_env()
    database = database or Database(settings)
    configure_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the store once; a failed first connection aborts startup."""
        try:
            await database.connect()
        except TransportError:
            logger.exception("Error connecting to the database; shutting down")
            raise
        logger.info("Bookstore Catalog API started ({})", settings.environment)
        try:
            yield
        finally:
            await database.close()
            logger.info("Bookstore Catalog API shutting down")

    app = FastAPI(
        title="Bookstore Catalog",
        description="Paginated, filterable book listings with CRUD for the catalog admin UI",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database

    # CORS: credentials cannot be combined with a wildcard origin
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(catalog_router, tags=["Books"])

    @app.get("/health")
    async def health():
        return {
            "status": "healthy" if database.is_connected else "unavailable",
            "version": VERSION,
        }

    return app


app = create_app()


def serve() -> None:
    """Run the API with uvicorn (console script: bookstore-api)."""
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    serve()
