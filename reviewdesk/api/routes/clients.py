"""
api/routes/clients.py
---------------------
Client management endpoints. Every query is scoped to the caller.

GET    /api/clients        — List the caller's clients (optional ?status=)
GET    /api/clients/{id}   — Fetch one client
POST   /api/clients        — Create a client
PUT    /api/clients/{id}   — Partially update a client
DELETE /api/clients/{id}   — Delete a client and its requests/testimonials
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdesk.core.exceptions import NotFoundError
from reviewdesk.db.session import get_db
from reviewdesk.dependencies import get_current_identity
from reviewdesk.models.client import ClientStatus
from reviewdesk.schemas.client import ClientCreate, ClientRead, ClientUpdate
from reviewdesk.services.client_service import ClientService
from reviewdesk.services.identity_service import Identity

router = APIRouter(prefix="/api/clients", tags=["Clients"])


@router.get(
    "",
    response_model=list[ClientRead],
    summary="List the caller's clients, newest first",
)
async def list_clients(
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
    client_status: Optional[ClientStatus] = Query(default=None, alias="status"),
) -> list[ClientRead]:
    clients = await ClientService.list(
        db,
        identity.id,
        status=client_status.value if client_status else None,
    )
    return [ClientRead.model_validate(c) for c in clients]


@router.get("/{client_id}", response_model=ClientRead, summary="Get one client")
async def get_client(
    client_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> ClientRead:
    client = await ClientService.get(db, client_id, identity.id)
    if client is None:
        raise NotFoundError("Client")
    return ClientRead.model_validate(client)


@router.post(
    "",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a client",
)
async def create_client(
    body: ClientCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> ClientRead:
    client = await ClientService.create(db, body.model_dump(), identity.id)
    return ClientRead.model_validate(client)


@router.put("/{client_id}", response_model=ClientRead, summary="Update a client")
async def update_client(
    client_id: str,
    body: ClientUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> ClientRead:
    """Only the fields present in the body are changed."""
    client = await ClientService.update(
        db, client_id, body.model_dump(exclude_unset=True), identity.id
    )
    if client is None:
        raise NotFoundError("Client")
    return ClientRead.model_validate(client)


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a client",
)
async def delete_client(
    client_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> Response:
    if not await ClientService.delete(db, client_id, identity.id):
        raise NotFoundError("Client")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
