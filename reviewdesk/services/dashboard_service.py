"""
services/dashboard_service.py
-----------------------------
Read-only dashboard figures for one agent.

All numbers come from grouped COUNT queries over the caller's own rows.
They are not read in one transaction snapshot; read-committed consistency
is good enough for a dashboard.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from reviewdesk.core.logging import get_logger
from reviewdesk.models.review_request import ReviewRequestStatus
from reviewdesk.schemas.dashboard import DashboardStats
from reviewdesk.services.client_service import ClientService
from reviewdesk.services.review_request_service import ReviewRequestService
from reviewdesk.services.testimonial_service import TestimonialService

logger = get_logger(__name__)


def average_rating(breakdown: Mapping[int, int]) -> float:
    """
    Mean rating rounded half-up to one decimal place; 0 with no ratings.

    >>> average_rating({5: 2, 4: 1})
    4.7
    """
    total = sum(breakdown.values())
    if total == 0:
        return 0.0
    points = sum(rating * n for rating, n in breakdown.items())
    mean = Decimal(points) / Decimal(total)
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def percentage(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    ratio = Decimal(part * 100) / Decimal(whole)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class DashboardService:

    @staticmethod
    async def compute_stats(db: AsyncSession, user_id: str) -> DashboardStats:
        total_clients = await ClientService.count(db, user_id)
        by_status = await ReviewRequestService.count_by_status(db, user_id)
        breakdown = await TestimonialService.rating_breakdown(db, user_id)

        stats = DashboardStats(
            total_clients=total_clients,
            reviews_received=sum(breakdown.values()),
            pending_requests=by_status[ReviewRequestStatus.pending.value],
            avg_rating=average_rating(breakdown),
            rating_breakdown={str(rating): n for rating, n in breakdown.items()},
            requests_by_status=by_status,
            completion_rate=percentage(
                by_status[ReviewRequestStatus.completed.value],
                sum(by_status.values()),
            ),
        )
        logger.debug("Dashboard stats computed", user_id=user_id)
        return stats
