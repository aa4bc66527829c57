"""
api/routes/testimonials.py
--------------------------
Testimonial endpoints. Testimonials are create-only.

GET  /api/testimonials        — List (optional ?rating= & ?isPublic=)
GET  /api/testimonials/{id}   — Fetch one testimonial
POST /api/testimonials        — Store a client's testimonial
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdesk.core.exceptions import NotFoundError
from reviewdesk.db.session import get_db
from reviewdesk.dependencies import get_current_identity
from reviewdesk.models.testimonial import MAX_RATING, MIN_RATING
from reviewdesk.schemas.testimonial import TestimonialCreate, TestimonialRead
from reviewdesk.services.identity_service import Identity
from reviewdesk.services.testimonial_service import TestimonialService

router = APIRouter(prefix="/api/testimonials", tags=["Testimonials"])


@router.get(
    "",
    response_model=list[TestimonialRead],
    summary="List the caller's testimonials, newest first",
)
async def list_testimonials(
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
    rating: Optional[int] = Query(default=None, ge=MIN_RATING, le=MAX_RATING),
    is_public: Optional[bool] = Query(default=None, alias="isPublic"),
) -> list[TestimonialRead]:
    testimonials = await TestimonialService.list(
        db, identity.id, rating=rating, is_public=is_public
    )
    return [TestimonialRead.model_validate(t) for t in testimonials]


@router.get("/{testimonial_id}", response_model=TestimonialRead, summary="Get one testimonial")
async def get_testimonial(
    testimonial_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> TestimonialRead:
    testimonial = await TestimonialService.get(db, testimonial_id, identity.id)
    if testimonial is None:
        raise NotFoundError("Testimonial")
    return TestimonialRead.model_validate(testimonial)


@router.post(
    "",
    response_model=TestimonialRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a testimonial",
)
async def create_testimonial(
    body: TestimonialCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> TestimonialRead:
    """
    clientId (and requestId, when given) must belong to the caller.
    The linked review request's status is left unchanged.
    """
    testimonial = await TestimonialService.create(db, body.model_dump(), identity.id)
    return TestimonialRead.model_validate(testimonial)
