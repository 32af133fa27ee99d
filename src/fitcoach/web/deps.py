"""Request dependencies shared by the routers."""

from pathlib import Path

from fastapi import Header, HTTPException, Request

from ..services.generation import GenerationService
from ..services.readiness import ReadinessService


def get_trainer_id(x_trainer_id: str | None = Header(default=None)) -> str:
    """Owner identity for the request.

    Authentication happens upstream; the header is trusted as given.
    """
    if not x_trainer_id or not x_trainer_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-Trainer-Id header")
    return x_trainer_id.strip()


def get_db_path(request: Request) -> Path:
    return request.app.state.db_path


def get_generation_service(request: Request) -> GenerationService:
    return request.app.state.generation_service


def get_readiness_service(request: Request) -> ReadinessService:
    return request.app.state.readiness_service
