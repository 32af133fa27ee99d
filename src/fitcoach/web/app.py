"""FastAPI application for the fitcoach JSON API."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from .. import __version__
from ..agents.provider import GenerationProvider
from ..config import Settings, get_settings
from ..db.engine import get_db_path, init_db
from ..db.repositories import ClientRepository, ReadinessRepository
from ..errors import (
    HIGH_DEMAND_MESSAGE,
    ArtifactNotFoundError,
    ClientNotFoundError,
    GenerationFailed,
    PersistenceFailure,
)
from ..services.generation import create_generation_service
from ..services.readiness import ReadinessService
from .pending import PendingSaves
from .routers import clients, exercises, nutrition, programs, readiness, sessions


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    # Schema creation is idempotent
    await init_db(app.state.db_path)
    logger.info("API started", db_path=str(app.state.db_path))
    yield


def create_app(
    settings: Settings | None = None,
    provider: GenerationProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings (defaults to the environment)
        provider: Generation provider override, e.g. a test double
    """
    settings = settings or get_settings()
    db_path = get_db_path(settings.data_dir)

    app = FastAPI(
        title="fitcoach",
        description="AI-assisted coaching API for personal trainers",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db_path = db_path
    app.state.generation_service = create_generation_service(settings, provider, db_path)
    app.state.readiness_service = ReadinessService(
        ClientRepository(db_path), ReadinessRepository(db_path)
    )
    app.state.pending_saves = PendingSaves()

    app.include_router(clients.router)
    app.include_router(readiness.router)
    app.include_router(programs.router)
    app.include_router(nutrition.router)
    app.include_router(sessions.router)
    app.include_router(exercises.router)

    @app.exception_handler(ClientNotFoundError)
    @app.exception_handler(ArtifactNotFoundError)
    async def not_found_handler(request: Request, exc: Exception):
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(GenerationFailed)
    async def generation_failed_handler(request: Request, exc: GenerationFailed):
        logger.warning(
            "Generation request failed",
            path=request.url.path,
            kind=exc.kind,
            attempts=exc.attempts,
            outcome=exc.cause,
        )
        return JSONResponse(status_code=503, content={"detail": HIGH_DEMAND_MESSAGE})

    @app.exception_handler(PersistenceFailure)
    async def persistence_failure_handler(request: Request, exc: PersistenceFailure):
        token = request.app.state.pending_saves.add(exc)
        logger.error("Generated artifact awaiting save retry", kind=exc.kind, retry_token=token)
        return JSONResponse(
            status_code=500,
            content={"detail": exc.user_message, "retry_token": token},
        )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
