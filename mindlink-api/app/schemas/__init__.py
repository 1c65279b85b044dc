from app.schemas.activity import ActivityRead, ActivityType
from app.schemas.category import CategoryRead
from app.schemas.link import LinkCreate, LinkRead, LinkUpdate
from app.schemas.metadata import InstagramMetadata, MetadataError
from app.schemas.user import UserCreate, UserRead, UserWithApiKey

__all__ = [
    "ActivityRead",
    "ActivityType",
    "CategoryRead",
    "InstagramMetadata",
    "LinkCreate",
    "LinkRead",
    "LinkUpdate",
    "MetadataError",
    "UserCreate",
    "UserRead",
    "UserWithApiKey",
]
