from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ActivityType(str, Enum):
    LINK_CREATED = "link_created"
    LINK_UPDATED = "link_updated"
    LINK_DELETED = "link_deleted"


class ActivityRead(BaseModel):
    id: int
    type: ActivityType
    link_id: Optional[UUID] = None
    link_title: str
    message: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
