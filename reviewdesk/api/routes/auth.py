"""
api/routes/auth.py
------------------
Authentication endpoints.

Sign-up, login and token refresh happen directly between the browser and the
identity provider; this API only reports who a token belongs to.

GET /api/auth/user  — Return the verified identity behind the bearer token.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from reviewdesk.dependencies import get_current_identity
from reviewdesk.schemas.user import IdentityRead
from reviewdesk.services.identity_service import Identity

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


@router.get(
    "/user",
    response_model=IdentityRead,
    summary="Get the currently authenticated user",
)
async def get_auth_user(
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> IdentityRead:
    return IdentityRead(id=identity.id, email=identity.email, name=identity.name)
