"""
models/client.py
----------------
A buyer or seller an agent works with.

Clients are the root of each agent's data: review requests and testimonials
reference a client and are removed with it (ON DELETE CASCADE).
"""

from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from reviewdesk.db.base import Base, CreatedAtMixin, OwnedMixin, UUIDPrimaryKeyMixin


class ClientType(str, PyEnum):
    buyer = "buyer"
    seller = "seller"
    both = "both"


class ClientStatus(str, PyEnum):
    active = "active"
    closed = "closed"
    inactive = "inactive"


class Client(Base, UUIDPrimaryKeyMixin, OwnedMixin, CreatedAtMixin):
    __tablename__ = "clients"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    client_type: Mapped[str] = mapped_column(String(20), nullable=False)
    property_type: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ClientStatus.active.value, index=True
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="clients")  # noqa: F821

    def __repr__(self) -> str:
        return f"<Client id={self.id} user_id={self.user_id} status={self.status}>"
