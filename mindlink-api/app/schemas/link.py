from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

LinkContentType = Literal["link", "reel", "post"]


class LinkBase(BaseModel):
    url: HttpUrl
    title: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None


class LinkCreate(LinkBase):
    category: Optional[str] = None
    tags: Optional[list[str]] = None


class LinkUpdate(BaseModel):
    title: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    category: Optional[str] = Field(default=None)
    tags: Optional[list[str]] = Field(default=None)
    notes: Optional[str] = Field(default=None)
    is_pinned: Optional[bool] = Field(default=None)
    is_read: Optional[bool] = Field(default=None)


class LinkRead(LinkBase):
    id: UUID
    user_id: UUID
    title: str
    category: str
    tags: list[str]
    content_type: LinkContentType
    thumbnail_url: Optional[str] = None
    is_pinned: bool
    is_read: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
