"""
schemas/testimonial.py
----------------------
Pydantic models for testimonials.

rating is a strict integer: 4.0, "4" and true are all rejected.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from reviewdesk.models.testimonial import MAX_RATING, MIN_RATING
from reviewdesk.schemas.base import CamelInput, CamelModel


class TestimonialCreate(CamelInput):
    client_id: str = Field(..., min_length=1, max_length=36)
    request_id: Optional[str] = Field(default=None, max_length=36)
    content: str = Field(..., min_length=1, max_length=10000)
    rating: int = Field(..., ge=MIN_RATING, le=MAX_RATING, strict=True)
    property_type: Optional[str] = Field(default=None, max_length=100)
    is_public: bool = True


class TestimonialRead(CamelModel):
    id: str
    user_id: str
    client_id: str
    request_id: Optional[str] = None
    content: str
    rating: int
    property_type: Optional[str] = None
    is_public: bool
    created_at: datetime
