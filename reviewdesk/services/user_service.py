"""
services/user_service.py
------------------------
Keeps the local users table in step with the external identity provider.

The provider owns sign-up, passwords and sessions. Tenant-owned rows carry a
foreign key to users.id, so the first authenticated request from a new
identity inserts its mirror row; later requests refresh email/name when the
provider reports a change.
"""

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdesk.core.exceptions import RepositoryError
from reviewdesk.core.logging import get_logger
from reviewdesk.models.user import User, UserRole
from reviewdesk.services.identity_service import Identity

logger = get_logger(__name__)


class UserService:

    @staticmethod
    async def get_user(db: AsyncSession, user_id: str) -> User | None:
        try:
            return await db.get(User, user_id)
        except SQLAlchemyError as exc:
            raise RepositoryError(f"get on users failed: {exc}") from exc

    @staticmethod
    async def ensure_user(db: AsyncSession, identity: Identity) -> User:
        """
        Return the mirror row for `identity`, inserting or refreshing it.

        Must run before any other write in the request: a concurrent first
        request for the same identity is resolved by rolling back and
        re-reading the row the other request inserted.
        """
        email = identity.email or None
        user = await UserService.get_user(db, identity.id)
        if user is not None:
            if user.email != email or user.name != identity.name:
                user.email = email
                user.name = identity.name
                try:
                    await db.flush()
                except SQLAlchemyError as exc:
                    raise RepositoryError(f"refresh on users failed: {exc}") from exc
            return user

        user = User(
            id=identity.id,
            email=email,
            name=identity.name,
            role=UserRole.agent.value,
        )
        db.add(user)
        try:
            await db.flush()
            await db.refresh(user)
            logger.info("User mirrored from identity provider", user_id=user.id)
            return user
        except IntegrityError as exc:
            await db.rollback()
            user = await UserService.get_user(db, identity.id)
            if user is None:
                # Unique email held by a different id
                raise RepositoryError(f"insert on users failed: {exc}") from exc
            return user
        except SQLAlchemyError as exc:
            raise RepositoryError(f"insert on users failed: {exc}") from exc
