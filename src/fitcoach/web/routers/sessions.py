"""Workout session routes."""

from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Depends

from ...db.repositories import ProgramRepository, SessionRepository
from ...errors import ArtifactNotFoundError
from ...models.session import ExerciseLog, WorkoutSession
from ..deps import get_db_path, get_trainer_id
from ..schemas import ExerciseLogBody, SessionBody, SessionUpdateBody

router = APIRouter(prefix="/api", tags=["sessions"])


@router.post("/clients/{client_id}/sessions", status_code=201)
async def create_session(
    client_id: str,
    body: SessionBody,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """Start a session for one day of a client's program."""
    program = await ProgramRepository(db_path).get(trainer_id, body.program_id)
    if program is None or program.client_id != client_id:
        raise ArtifactNotFoundError("program", body.program_id)

    session = await SessionRepository(db_path).create(
        WorkoutSession(
            client_id=client_id,
            program_id=body.program_id,
            trainer_id=trainer_id,
            session_date=body.session_date or datetime.now(timezone.utc),
            week_number=body.week_number,
            day_name=body.day_name,
            notes=body.notes,
        )
    )
    return session.to_dict()


@router.get("/clients/{client_id}/sessions")
async def list_sessions(
    client_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    sessions = await SessionRepository(db_path).list_for_client(trainer_id, client_id)
    return [s.to_dict() for s in sessions]


@router.get("/sessions/{session_id}")
async def get_session(
    session_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """Get a session with its exercise logs."""
    session = await SessionRepository(db_path).get(trainer_id, session_id)
    if session is None:
        raise ArtifactNotFoundError("session", session_id)
    return session.to_dict()


@router.patch("/sessions/{session_id}")
async def update_session(
    session_id: str,
    body: SessionUpdateBody,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """Mark completed and/or change notes."""
    session = await SessionRepository(db_path).update(
        trainer_id, session_id, completed=body.completed, notes=body.notes
    )
    if session is None:
        raise ArtifactNotFoundError("session", session_id)
    return session.to_dict()


@router.delete("/sessions/{session_id}")
async def delete_session(
    session_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    if not await SessionRepository(db_path).delete(trainer_id, session_id):
        raise ArtifactNotFoundError("session", session_id)
    return {"success": True}


@router.post("/sessions/{session_id}/exercises", status_code=201)
async def add_exercise_log(
    session_id: str,
    body: ExerciseLogBody,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """Record one exercise's sets, reps and load."""
    log = await SessionRepository(db_path).add_exercise_log(
        trainer_id, ExerciseLog(session_id=session_id, **body.model_dump())
    )
    if log is None:
        raise ArtifactNotFoundError("session", session_id)
    return log.to_dict()


@router.get("/sessions/{session_id}/exercises")
async def list_exercise_logs(
    session_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    repo = SessionRepository(db_path)
    if await repo.get(trainer_id, session_id) is None:
        raise ArtifactNotFoundError("session", session_id)
    logs = await repo.list_exercise_logs(trainer_id, session_id)
    return [log.to_dict() for log in logs]
