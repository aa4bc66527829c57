"""
schemas/user.py
---------------
The verified identity returned by GET /api/auth/user.
"""

from reviewdesk.schemas.base import CamelModel


class IdentityRead(CamelModel):
    id: str
    email: str
    name: str
