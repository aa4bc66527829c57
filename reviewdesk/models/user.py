"""
models/user.py
--------------
Local mirror of an identity managed by the external auth provider.

The provider is authoritative for who a user is; this row exists so that
tenant-owned tables have something to reference. It is created the first
time a verified identity reaches the API and is never deleted here.
"""

from enum import Enum as PyEnum

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reviewdesk.db.base import Base, CreatedAtMixin


class UserRole(str, PyEnum):
    agent = "agent"


class User(Base, CreatedAtMixin):
    __tablename__ = "users"

    # Same id as the provider's user id, so no default is generated here
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # NULL when the provider has no email; unique only among real addresses
    email: Mapped[str | None] = mapped_column(
        String(320), unique=True, nullable=True, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.agent.value
    )

    # Relationships
    clients: Mapped[list["Client"]] = relationship(  # noqa: F821
        "Client", back_populates="user", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role}>"
