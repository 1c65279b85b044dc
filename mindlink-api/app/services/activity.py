import logging
from collections.abc import Iterable
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Activity, Link
from app.schemas.activity import ActivityType

logger = logging.getLogger(__name__)

_DETAIL_FIELDS = {"title", "description", "category", "tags"}


def update_message(changes: dict[str, object]) -> Optional[str]:
    """Summarize a link update, or ``None`` when nothing worth showing changed.

    Pin and read toggles take precedence over edits to the link's details.
    """
    if "is_pinned" in changes:
        return "Pinned a link" if changes["is_pinned"] else "Unpinned a link"
    if "is_read" in changes:
        return "Marked a link as read" if changes["is_read"] else "Marked a link as unread"
    if _DETAIL_FIELDS.intersection(changes):
        return "Updated link details"
    return None


def _message_for(activity_type: ActivityType, changes: Optional[dict[str, object]]) -> Optional[str]:
    if activity_type is ActivityType.LINK_CREATED:
        return "Added a new link"
    if activity_type is ActivityType.LINK_DELETED:
        return "Deleted a link"
    return update_message(changes or {})


async def record_activity(
    db: AsyncSession,
    activity_type: ActivityType,
    link: Link,
    changes: Optional[dict[str, object]] = None,
) -> Optional[Activity]:
    """Persist an activity for ``link`` in its own commit.

    Failures are logged and swallowed: the link operation has already been
    committed and must not be reported as failed.
    """
    message = _message_for(activity_type, changes)
    if message is None:
        return None

    activity = Activity(
        user_id=link.user_id,
        type=activity_type.value,
        link_id=link.id,
        link_title=link.title,
        message=message,
    )
    try:
        db.add(activity)
        await db.commit()
    except SQLAlchemyError:
        logger.exception(
            "Failed to record activity",
            extra={"extra_type": activity_type.value, "extra_link_id": str(link.id)},
        )
        await db.rollback()
        return None
    return activity


def changed_fields(link: Link, updates: Iterable[tuple[str, object]]) -> dict[str, object]:
    """Apply ``updates`` to ``link`` and return only the values that differ."""
    changes: dict[str, object] = {}
    for field, value in updates:
        if getattr(link, field) != value:
            setattr(link, field, value)
            changes[field] = value
    return changes
