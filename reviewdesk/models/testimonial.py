"""
models/testimonial.py
---------------------
A client's rating and written review. Immutable once stored.
"""

from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Integer, String, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from reviewdesk.db.base import Base, CreatedAtMixin, OwnedMixin, UUIDPrimaryKeyMixin

MIN_RATING = 1
MAX_RATING = 5


class Testimonial(Base, UUIDPrimaryKeyMixin, OwnedMixin, CreatedAtMixin):
    __tablename__ = "testimonials"
    __table_args__ = (
        CheckConstraint(
            f"rating BETWEEN {MIN_RATING} AND {MAX_RATING}",
            name="ck_testimonials_rating_range",
        ),
    )

    client_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    request_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("review_requests.id", ondelete="SET NULL"),
        nullable=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    property_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    is_public: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=true()
    )

    def __repr__(self) -> str:
        return f"<Testimonial id={self.id} client_id={self.client_id} rating={self.rating}>"
