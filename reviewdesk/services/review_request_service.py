"""
services/review_request_service.py
----------------------------------
Business logic for review requests.

Status is the only field that changes after creation, and it drives
completed_at: stamped when a request becomes "completed", cleared for any
other status.
"""

from typing import Any, Dict, Mapping, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdesk.core.exceptions import FieldValidationError, field_error
from reviewdesk.db.base import utcnow
from reviewdesk.models.review_request import ReviewRequest, ReviewRequestStatus
from reviewdesk.services.client_service import ClientService
from reviewdesk.services.repository import TenantScopedRepository


class ReviewRequestService(TenantScopedRepository[ReviewRequest]):
    model = ReviewRequest
    order_column = "sent_at"
    filterable = frozenset({"status", "client_id"})

    @classmethod
    async def create(
        cls, db: AsyncSession, data: Mapping[str, Any], user_id: str
    ) -> ReviewRequest:
        """
        Record an outreach to one of the caller's own clients.
        New requests always start as pending.
        """
        if await ClientService.get(db, data["client_id"], user_id) is None:
            raise FieldValidationError(
                errors=[field_error(["clientId"], "Client not found")]
            )
        values = dict(data, status=ReviewRequestStatus.pending.value, completed_at=None)
        return await super().create(db, values, user_id)

    @classmethod
    async def update_status(
        cls,
        db: AsyncSession,
        request_id: str,
        status: ReviewRequestStatus,
        user_id: str,
    ) -> Optional[ReviewRequest]:
        completed_at = utcnow() if status is ReviewRequestStatus.completed else None
        return await cls.update(
            db,
            request_id,
            {"status": status.value, "completed_at": completed_at},
            user_id,
        )

    @classmethod
    async def count_by_status(cls, db: AsyncSession, user_id: str) -> Dict[str, int]:
        """Request counts per status; every status is present, zero if unused."""
        stmt = (
            select(ReviewRequest.status, func.count())
            .where(cls._owned(user_id))
            .group_by(ReviewRequest.status)
        )
        result = await cls._execute(db, stmt, "count_by_status")
        counts = {status.value: 0 for status in ReviewRequestStatus}
        for status, n in result.all():
            counts[status] = n
        return counts
