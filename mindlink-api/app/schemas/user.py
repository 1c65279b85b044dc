from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    email: EmailStr
    display_name: Optional[str] = Field(default=None, max_length=100)


class UserRead(UserCreate):
    id: UUID
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UserWithApiKey(UserRead):
    """Returned once, at sign-up; the key is never shown again."""

    api_key: str
