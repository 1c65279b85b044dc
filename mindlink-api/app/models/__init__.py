from app.models.activity import Activity
from app.models.base import Base
from app.models.link import Link
from app.models.user import User

__all__ = ["Activity", "Base", "Link", "User"]
