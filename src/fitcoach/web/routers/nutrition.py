"""Nutrition plan routes."""

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException

from ...db.repositories import ClientRepository, NutritionPlanRepository
from ...errors import ArtifactNotFoundError, ClientNotFoundError
from ...models.requests import NutritionRequest
from ...services.generation import GenerationService
from ..deps import get_db_path, get_generation_service, get_trainer_id
from ..schemas import NutritionGenerateBody, NutritionUpdateBody

router = APIRouter(prefix="/api/clients/{client_id}/nutrition", tags=["nutrition"])


@router.post("/generate", status_code=201)
async def generate_nutrition_plan(
    client_id: str,
    body: NutritionGenerateBody,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
    service: GenerationService = Depends(get_generation_service),
):
    """Generate a plan, replacing the client's current one."""
    client = await ClientRepository(db_path).get(trainer_id, client_id)
    if client is None:
        raise ClientNotFoundError(client_id)

    overrides = body.model_dump(exclude={"activity_level"}, exclude_none=True)
    try:
        request = NutritionRequest.from_client(
            client, activity_level=body.activity_level, **overrides
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    plan = await service.generate_nutrition_plan(trainer_id, client_id, request)
    return plan.to_dict()


@router.get("")
async def get_nutrition_plan(
    client_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """The client's current plan, or null."""
    if await ClientRepository(db_path).get(trainer_id, client_id) is None:
        raise ClientNotFoundError(client_id)
    plan = await NutritionPlanRepository(db_path).get_for_client(trainer_id, client_id)
    return plan.to_dict() if plan else None


@router.put("/{plan_id}")
async def update_nutrition_plan(
    client_id: str,
    plan_id: str,
    body: NutritionUpdateBody,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """Manually adjust calories, macros or notes."""
    repo = NutritionPlanRepository(db_path)
    plan = await repo.get_for_client(trainer_id, client_id)
    if plan is None or plan.id != plan_id:
        raise ArtifactNotFoundError("nutrition plan", plan_id)

    plan.data = plan.data.with_targets(**body.model_dump())
    plan = await repo.update(plan)
    if plan is None:
        raise ArtifactNotFoundError("nutrition plan", plan_id)
    return plan.to_dict()


@router.delete("/{plan_id}")
async def delete_nutrition_plan(
    client_id: str,
    plan_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    repo = NutritionPlanRepository(db_path)
    plan = await repo.get_for_client(trainer_id, client_id)
    if plan is None or plan.id != plan_id:
        raise ArtifactNotFoundError("nutrition plan", plan_id)
    await repo.delete(trainer_id, plan_id)
    return {"success": True}
