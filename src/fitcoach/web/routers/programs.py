"""Program generation and management routes."""

from pathlib import Path

from fastapi import APIRouter, Depends

from ...db.repositories import ClientRepository, ProgramRepository
from ...errors import ArtifactNotFoundError, ClientNotFoundError
from ...models.requests import ProgramRequest
from ...services.generation import GenerationService
from ..deps import get_db_path, get_generation_service, get_trainer_id
from ..schemas import ProgramGenerateBody

router = APIRouter(prefix="/api", tags=["programs"])


@router.post("/clients/{client_id}/programs/generate", status_code=201)
async def generate_program(
    client_id: str,
    body: ProgramGenerateBody,
    trainer_id: str = Depends(get_trainer_id),
    service: GenerationService = Depends(get_generation_service),
):
    """Generate and store a workout program.

    Blocks until the program is stored or every attempt has failed.
    """
    program = await service.generate_program(
        trainer_id, client_id, ProgramRequest(weeks=body.weeks, notes=body.notes)
    )
    return program.to_dict()


@router.get("/clients/{client_id}/programs")
async def list_client_programs(
    client_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """List a client's programs, newest first."""
    if await ClientRepository(db_path).get(trainer_id, client_id) is None:
        raise ClientNotFoundError(client_id)
    programs = await ProgramRepository(db_path).list_for_client(trainer_id, client_id)
    return [p.to_dict() for p in programs]


@router.get("/programs")
async def list_programs(
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """List every program the trainer owns."""
    programs = await ProgramRepository(db_path).list_all(trainer_id)
    return [p.to_dict() for p in programs]


@router.get("/programs/{program_id}")
async def get_program(
    program_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    program = await ProgramRepository(db_path).get(trainer_id, program_id)
    if program is None:
        raise ArtifactNotFoundError("program", program_id)
    return program.to_dict()


@router.delete("/programs/{program_id}")
async def delete_program(
    program_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    if not await ProgramRepository(db_path).delete(trainer_id, program_id):
        raise ArtifactNotFoundError("program", program_id)
    return {"success": True}
