"""Authenticated caller identity."""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """Caller identity resolved by the surrounding application."""
    id: UUID
    email: Optional[str] = None
    is_admin: bool = False

    model_config = ConfigDict(from_attributes=True, frozen=True)
