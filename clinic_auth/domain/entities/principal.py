"""
Principal

The authenticated identity attached to a request. Never persisted.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class Principal(BaseModel):
    """Produced by the authorization context resolver for each request"""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    role: int
    session_id: UUID
