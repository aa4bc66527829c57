"""
schemas/review_request.py
-------------------------
Pydantic models for review requests.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from reviewdesk.schemas.base import CamelInput, CamelModel


class ReviewRequestCreate(CamelInput):
    client_id: str = Field(..., min_length=1, max_length=36)
    message: str = Field(
        ...,
        min_length=1,
        max_length=5000,
        examples=["Hi Jane, would you mind sharing a few words about working with me?"],
    )


class ReviewRequestStatusUpdate(CamelInput):
    # Kept as a plain string so an unknown value yields "Invalid status"
    # rather than the generic validation message.
    status: str


class ReviewRequestRead(CamelModel):
    id: str
    user_id: str
    client_id: str
    message: str
    status: str
    sent_at: datetime
    completed_at: Optional[datetime] = None
