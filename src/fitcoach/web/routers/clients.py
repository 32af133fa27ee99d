"""Client management routes."""

from dataclasses import replace
from pathlib import Path

from fastapi import APIRouter, Depends

from ...db.repositories import ClientRepository
from ...errors import ClientNotFoundError
from ...models.client import Client
from ..deps import get_db_path, get_trainer_id
from ..schemas import ClientBody

router = APIRouter(prefix="/api/clients", tags=["clients"])


def _client_response(client: Client) -> dict:
    return {
        "id": client.id,
        **client.to_dict(),
        "created_at": client.created_at.isoformat() if client.created_at else None,
        "updated_at": client.updated_at.isoformat() if client.updated_at else None,
    }


@router.get("")
async def list_clients(
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """List the trainer's clients."""
    clients = await ClientRepository(db_path).list_all(trainer_id)
    return [_client_response(c) for c in clients]


@router.post("", status_code=201)
async def create_client(
    body: ClientBody,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """Create a client."""
    client = Client.from_dict(body.model_dump(mode="json"), trainer_id=trainer_id)
    client = await ClientRepository(db_path).create(client)
    return _client_response(client)


@router.get("/{client_id}")
async def get_client(
    client_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """Get one client."""
    client = await ClientRepository(db_path).get(trainer_id, client_id)
    if client is None:
        raise ClientNotFoundError(client_id)
    return _client_response(client)


@router.put("/{client_id}")
async def update_client(
    client_id: str,
    body: ClientBody,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """Replace a client's profile."""
    repo = ClientRepository(db_path)
    existing = await repo.get(trainer_id, client_id)
    if existing is None:
        raise ClientNotFoundError(client_id)

    updated = Client.from_dict(
        body.model_dump(mode="json"),
        trainer_id=trainer_id,
        id=client_id,
        created_at=existing.created_at,
    )
    updated = await repo.update(updated)
    if updated is None:
        raise ClientNotFoundError(client_id)
    return _client_response(updated)


@router.delete("/{client_id}")
async def delete_client(
    client_id: str,
    trainer_id: str = Depends(get_trainer_id),
    db_path: Path = Depends(get_db_path),
):
    """Delete a client and everything they own."""
    if not await ClientRepository(db_path).delete(trainer_id, client_id):
        raise ClientNotFoundError(client_id)
    return {"success": True}
