from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ContentType = Literal["reel", "post"]


class InstagramMetadata(BaseModel):
    title: str
    description: str
    thumbnail_url: str = ""
    author_name: str
    author_url: str
    type: Literal["video"] = "video"
    tags: list[str] = Field(default_factory=list)
    content_type: ContentType = Field(alias="contentType")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class MetadataError(BaseModel):
    """Body returned when metadata extraction fails."""

    error: str
    details: str
    status: int | None = None
    data: Any = None
    stack: str | None = None
