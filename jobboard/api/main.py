"""FastAPI entrypoint and HTTP routes."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from jobboard.api.routes import admin_router, public_router
from jobboard.cache import QueryResultCache
from jobboard.config.settings import Settings, get_settings
from jobboard.db.session import init_db
from jobboard.monitoring.logging import configure_logging
from jobboard.repositories import (
    ApplicationRepository,
    DuplicateApplicationError,
    JobRepository,
    RecordNotFoundError,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield


def create_app(settings: Settings | None = None) -> FastAPI:
    """Initialise the FastAPI application."""

    settings = settings or get_settings()
    configure_logging(settings)
    app = FastAPI(
        title="Job Board API",
        version="0.1.0",
        docs_url="/docs" if settings.environment != "prod" else None,
        redoc_url="/redoc" if settings.environment != "prod" else None,
        lifespan=lifespan,
    )
    app.state.job_repository = JobRepository(
        QueryResultCache(settings.query_cache_size, settings.query_cache_ttl),
        settings=settings,
    )
    app.state.application_repository = ApplicationRepository(
        QueryResultCache(settings.query_cache_size, settings.query_cache_ttl),
        settings=settings,
    )

    @app.exception_handler(RecordNotFoundError)
    async def _not_found(_: Request, exc: RecordNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": str(exc)})

    @app.exception_handler(DuplicateApplicationError)
    async def _duplicate(_: Request, exc: DuplicateApplicationError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)})

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple health endpoint used for readiness probes."""

        return {"status": "ok"}

    app.include_router(admin_router)
    app.include_router(public_router)
    return app


app = create_app()
