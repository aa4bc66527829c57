"""
models/__init__.py
------------------
Re-export all models so create_tables.py (and Alembic, if added) can
discover every table through a single import:

    from reviewdesk.models import Base
"""

from reviewdesk.db.base import Base
from reviewdesk.models.user import User, UserRole
from reviewdesk.models.client import Client, ClientStatus, ClientType
from reviewdesk.models.review_request import ReviewRequest, ReviewRequestStatus
from reviewdesk.models.testimonial import Testimonial

__all__ = [
    "Base",
    "User",
    "UserRole",
    "Client",
    "ClientStatus",
    "ClientType",
    "ReviewRequest",
    "ReviewRequestStatus",
    "Testimonial",
]
