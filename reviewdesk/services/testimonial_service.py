"""
services/testimonial_service.py
-------------------------------
Business logic for testimonials.

Testimonials are append-only: the inherited update/delete are never routed.
Linking a testimonial to a review request does NOT complete that request;
callers that want both must also call ReviewRequestService.update_status.
"""

from typing import Any, Dict, Mapping

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdesk.core.exceptions import FieldValidationError, field_error
from reviewdesk.models.testimonial import MAX_RATING, MIN_RATING, Testimonial
from reviewdesk.services.client_service import ClientService
from reviewdesk.services.repository import TenantScopedRepository
from reviewdesk.services.review_request_service import ReviewRequestService


class TestimonialService(TenantScopedRepository[Testimonial]):
    model = Testimonial
    filterable = frozenset({"rating", "is_public", "client_id"})

    @classmethod
    async def create(
        cls, db: AsyncSession, data: Mapping[str, Any], user_id: str
    ) -> Testimonial:
        errors = []
        if await ClientService.get(db, data["client_id"], user_id) is None:
            errors.append(field_error(["clientId"], "Client not found"))

        request_id = data.get("request_id")
        if request_id is not None:
            request = await ReviewRequestService.get(db, request_id, user_id)
            if request is None:
                errors.append(field_error(["requestId"], "Review request not found"))
            elif request.client_id != data["client_id"]:
                errors.append(
                    field_error(["requestId"], "Review request belongs to a different client")
                )

        if errors:
            raise FieldValidationError(errors=errors)
        return await super().create(db, data, user_id)

    @classmethod
    async def rating_breakdown(cls, db: AsyncSession, user_id: str) -> Dict[int, int]:
        """Testimonial counts keyed by rating 1..5, zero for unused ratings."""
        stmt = (
            select(Testimonial.rating, func.count())
            .where(cls._owned(user_id))
            .group_by(Testimonial.rating)
        )
        result = await cls._execute(db, stmt, "rating_breakdown")
        breakdown = {rating: 0 for rating in range(MIN_RATING, MAX_RATING + 1)}
        for rating, n in result.all():
            breakdown[rating] = n
        return breakdown
