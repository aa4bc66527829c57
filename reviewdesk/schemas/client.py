"""
schemas/client.py
-----------------
Pydantic request/response models for Client.

Naming convention:
  ClientCreate  → inbound POST body
  ClientUpdate  → inbound PUT body, every field optional
  ClientRead    → outbound response body

user_id is deliberately absent from the inbound models: the owner always
comes from the verified identity, and unknown keys are ignored.
"""

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from reviewdesk.models.client import ClientStatus, ClientType
from reviewdesk.schemas.base import CamelInput, CamelModel


class ClientCreate(CamelInput):
    name: str = Field(..., min_length=1, max_length=255, examples=["Jane Doe"])
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=50)
    client_type: ClientType
    property_type: str = Field(..., min_length=1, max_length=100, examples=["condo"])
    status: ClientStatus = ClientStatus.active


class ClientUpdate(CamelInput):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=50)
    client_type: Optional[ClientType] = None
    property_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    status: Optional[ClientStatus] = None

    @field_validator("name", "email", "client_type", "property_type", "status")
    @classmethod
    def reject_null(cls, v):
        # Omit a field to leave it unchanged; only phone may be cleared.
        if v is None:
            raise ValueError("Field may not be null")
        return v


class ClientRead(CamelModel):
    id: str
    user_id: str
    name: str
    email: str
    phone: Optional[str] = None
    client_type: str
    property_type: str
    status: str
    created_at: datetime
