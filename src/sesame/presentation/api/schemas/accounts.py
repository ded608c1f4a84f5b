"""Account schemas for request/response models."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AccountResponse(BaseModel):
    """Public view of an account: identifier and username only."""

    id: UUID
    username: str

    model_config = ConfigDict(from_attributes=True)
