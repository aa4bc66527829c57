"""
models/review_request.py
------------------------
One outreach asking a client for a testimonial.

completed_at is non-null exactly when status == "completed"; the only
writer of either column after creation is ReviewRequestService.update_status.
"""

from datetime import datetime
from enum import Enum as PyEnum
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from reviewdesk.db.base import Base, OwnedMixin, UUIDPrimaryKeyMixin, utcnow


class ReviewRequestStatus(str, PyEnum):
    pending = "pending"
    completed = "completed"
    expired = "expired"


class ReviewRequest(Base, UUIDPrimaryKeyMixin, OwnedMixin):
    __tablename__ = "review_requests"

    client_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ReviewRequestStatus.pending.value, index=True
    )
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    def __repr__(self) -> str:
        return f"<ReviewRequest id={self.id} client_id={self.client_id} status={self.status}>"
