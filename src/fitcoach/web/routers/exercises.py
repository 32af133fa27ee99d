"""Exercise substitution and save-retry routes."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from ...errors import ArtifactNotFoundError, PersistenceFailure, StaleArtifactError
from ...models.requests import SwapRequest
from ...services.generation import GenerationService
from ..deps import get_generation_service, get_trainer_id
from ..schemas import SwapBody

router = APIRouter(prefix="/api", tags=["generation"])


@router.post("/exercises/swap")
async def swap_exercise(
    body: SwapBody,
    trainer_id: str = Depends(get_trainer_id),
    service: GenerationService = Depends(get_generation_service),
):
    """Suggest alternatives for an exercise. Nothing is stored."""
    alternatives = await service.suggest_alternatives(
        trainer_id, SwapRequest(**body.model_dump())
    )
    return {"alternatives": [a.to_dict() for a in alternatives]}


@router.post("/pending-saves/{token}")
async def retry_pending_save(
    token: str,
    request: Request,
    trainer_id: str = Depends(get_trainer_id),
    service: GenerationService = Depends(get_generation_service),
):
    """Save an already generated artifact whose first save failed."""
    pending = request.app.state.pending_saves
    # Claimed before the save so overlapping retries store it at most once
    failure = pending.take(token, trainer_id)
    if failure is None:
        raise ArtifactNotFoundError("pending save", token)

    try:
        saved = await service.retry_save(failure)
    except PersistenceFailure as e:
        pending.replace(token, e)
        return JSONResponse(
            status_code=500,
            content={"detail": e.user_message, "retry_token": token},
        )
    except StaleArtifactError as e:
        return JSONResponse(status_code=409, content={"detail": e.user_message})

    return saved.to_dict()
