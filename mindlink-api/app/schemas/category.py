from datetime import datetime

from pydantic import BaseModel


class CategoryRead(BaseModel):
    name: str
    link_count: int
    last_updated: datetime
