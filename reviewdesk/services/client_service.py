"""
services/client_service.py
--------------------------
Business logic for an agent's clients.
"""

from reviewdesk.models.client import Client
from reviewdesk.services.repository import TenantScopedRepository


class ClientService(TenantScopedRepository[Client]):
    model = Client
    filterable = frozenset({"status"})
