"""
api/routes/dashboard.py
-----------------------
GET /api/dashboard/stats  — Headline numbers for the caller's dashboard.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdesk.db.session import get_db
from reviewdesk.dependencies import get_current_identity
from reviewdesk.schemas.dashboard import DashboardStats
from reviewdesk.services.dashboard_service import DashboardService
from reviewdesk.services.identity_service import Identity

router = APIRouter(prefix="/api/dashboard", tags=["Dashboard"])


@router.get("/stats", response_model=DashboardStats, summary="Dashboard statistics")
async def get_dashboard_stats(
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> DashboardStats:
    return await DashboardService.compute_stats(db, identity.id)
