"""
schemas/dashboard.py
--------------------
Read model for GET /api/dashboard/stats.
"""

from typing import Dict

from reviewdesk.schemas.base import CamelModel


class DashboardStats(CamelModel):
    total_clients: int
    reviews_received: int
    pending_requests: int
    avg_rating: float
    # Keys "1".."5"; every rating is present, zero when unused
    rating_breakdown: Dict[str, int]
    requests_by_status: Dict[str, int]
    completion_rate: int
