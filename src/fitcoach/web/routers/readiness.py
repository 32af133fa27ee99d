"""Readiness check-in routes."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query

from ...models.readiness import ReadinessInput
from ...services.readiness import ReadinessService
from ..deps import get_readiness_service, get_trainer_id
from ..schemas import CheckInBody

router = APIRouter(prefix="/api/clients/{client_id}/readiness", tags=["readiness"])


@router.post("", status_code=201)
async def submit_check_in(
    client_id: str,
    body: CheckInBody,
    trainer_id: str = Depends(get_trainer_id),
    service: ReadinessService = Depends(get_readiness_service),
):
    """Score and store a daily check-in."""
    score = await service.submit_check_in(
        trainer_id,
        client_id,
        ReadinessInput(
            date=body.date or datetime.now(timezone.utc),
            sleep_hours=body.sleep_hours,
            stress_level=body.stress_level,
            muscle_soreness=body.muscle_soreness,
            energy_level=body.energy_level,
        ),
    )
    return score.to_dict()


@router.get("")
async def readiness_history(
    client_id: str,
    days: int = Query(default=30, ge=1, le=365),
    trainer_id: str = Depends(get_trainer_id),
    service: ReadinessService = Depends(get_readiness_service),
):
    """Scores from the last ``days`` days, newest first."""
    scores = await service.history(trainer_id, client_id, days=days)
    return [s.to_dict() for s in scores]


@router.get("/latest")
async def latest_readiness(
    client_id: str,
    trainer_id: str = Depends(get_trainer_id),
    service: ReadinessService = Depends(get_readiness_service),
):
    """Most recent score, or null."""
    score = await service.latest(trainer_id, client_id)
    return score.to_dict() if score else None
