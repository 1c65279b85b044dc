from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_session
from app.config import settings
from app.models import Activity, User
from app.schemas import ActivityRead

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("", response_model=list[ActivityRead])
async def list_activities(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
    limit: Annotated[Optional[int], Query(ge=1, le=100)] = None,
) -> list[ActivityRead]:
    """Recent activity for the current user, newest first."""
    result = await db.execute(
        select(Activity)
        .where(Activity.user_id == current_user.id)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
        .limit(limit or settings.activity_feed_limit)
    )
    return [ActivityRead.model_validate(a) for a in result.scalars().all()]
