"""
dependencies.py
---------------
FastAPI dependency injection functions for authentication.

Flow:
  1. HTTPBearer extracts the token from `Authorization: Bearer <token>`.
     auto_error is off so a missing header produces our own
     "No token provided" body instead of FastAPI's default.
  2. The configured IdentityVerifier checks the token with the identity
     provider (or locally, in "jwt" mode).
  3. The local mirror row for the identity is created or refreshed.
  4. The Identity is handed to the route handler as a plain argument.

Handlers take the owner id from this Identity only, never from the request
body, and pass it to every service call. There is no process-wide
"current user".
"""

from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdesk.core.exceptions import AuthError, MissingTokenError
from reviewdesk.core.logging import get_logger
from reviewdesk.db.session import get_db
from reviewdesk.services.identity_service import (
    Identity,
    IdentityVerifier,
    get_identity_verifier,
)
from reviewdesk.services.user_service import UserService

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(
    auto_error=False,
    description="Access token issued by the identity provider",
)


async def get_current_identity(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
    verifier: Annotated[IdentityVerifier, Depends(get_identity_verifier)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Identity:
    """
    Verify the bearer token and return the caller's Identity.
    Raises MissingTokenError / InvalidTokenError (401) or
    AuthServiceUnavailableError (500).
    """
    if credentials is None or not credentials.credentials.strip():
        raise MissingTokenError()

    try:
        identity = await verifier.verify(credentials.credentials.strip())
    except AuthError as exc:
        logger.warning("Token verification failed", reason=exc.message)
        raise

    await UserService.ensure_user(db, identity)
    return identity
