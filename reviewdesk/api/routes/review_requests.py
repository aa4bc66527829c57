"""
api/routes/review_requests.py
-----------------------------
Review-request endpoints.

GET /api/review-requests              — List (optional ?status= & ?clientId=)
GET /api/review-requests/{id}         — Fetch one request
POST /api/review-requests             — Record a new outreach (starts pending)
PUT /api/review-requests/{id}/status  — Move a request to another status
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from reviewdesk.core.exceptions import FieldValidationError, NotFoundError, field_error
from reviewdesk.db.session import get_db
from reviewdesk.dependencies import get_current_identity
from reviewdesk.models.review_request import ReviewRequestStatus
from reviewdesk.schemas.review_request import (
    ReviewRequestCreate,
    ReviewRequestRead,
    ReviewRequestStatusUpdate,
)
from reviewdesk.services.identity_service import Identity
from reviewdesk.services.review_request_service import ReviewRequestService

router = APIRouter(prefix="/api/review-requests", tags=["Review Requests"])

_ALLOWED_STATUSES = ", ".join(s.value for s in ReviewRequestStatus)


@router.get(
    "",
    response_model=list[ReviewRequestRead],
    summary="List the caller's review requests, most recently sent first",
)
async def list_review_requests(
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
    request_status: Optional[ReviewRequestStatus] = Query(default=None, alias="status"),
    client_id: Optional[str] = Query(default=None, alias="clientId"),
) -> list[ReviewRequestRead]:
    requests = await ReviewRequestService.list(
        db,
        identity.id,
        status=request_status.value if request_status else None,
        client_id=client_id,
    )
    return [ReviewRequestRead.model_validate(r) for r in requests]


@router.get("/{request_id}", response_model=ReviewRequestRead, summary="Get one review request")
async def get_review_request(
    request_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> ReviewRequestRead:
    review_request = await ReviewRequestService.get(db, request_id, identity.id)
    if review_request is None:
        raise NotFoundError("Review request")
    return ReviewRequestRead.model_validate(review_request)


@router.post(
    "",
    response_model=ReviewRequestRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a review request for one of the caller's clients",
)
async def create_review_request(
    body: ReviewRequestCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> ReviewRequestRead:
    review_request = await ReviewRequestService.create(db, body.model_dump(), identity.id)
    return ReviewRequestRead.model_validate(review_request)


@router.put(
    "/{request_id}/status",
    response_model=ReviewRequestRead,
    summary="Change a review request's status",
)
async def update_review_request_status(
    request_id: str,
    body: ReviewRequestStatusUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    identity: Annotated[Identity, Depends(get_current_identity)],
) -> ReviewRequestRead:
    """
    "completed" stamps completedAt with the current time; any other status
    clears it.
    """
    try:
        new_status = ReviewRequestStatus(body.status)
    except ValueError:
        raise FieldValidationError(
            "Invalid status",
            errors=[field_error(["status"], f"Expected one of: {_ALLOWED_STATUSES}", "enum")],
        )

    review_request = await ReviewRequestService.update_status(
        db, request_id, new_status, identity.id
    )
    if review_request is None:
        raise NotFoundError("Review request")
    return ReviewRequestRead.model_validate(review_request)
