from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, utcnow

if TYPE_CHECKING:
    from app.models.user import User


class Link(Base):
    __tablename__ = "links"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    url: Mapped[str]
    title: Mapped[str]
    description: Mapped[Optional[str]]
    category: Mapped[str] = mapped_column(default="Uncategorized")
    tags: Mapped[list[str]] = mapped_column(default=list)
    content_type: Mapped[str] = mapped_column(default="link")
    thumbnail_url: Mapped[Optional[str]]
    notes: Mapped[Optional[str]]
    is_pinned: Mapped[bool] = mapped_column(default=False)
    is_read: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, server_default=func.now(), onupdate=utcnow
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="links")

    # Constraints
    __table_args__ = (UniqueConstraint("user_id", "url", name="unique_user_url"),)
