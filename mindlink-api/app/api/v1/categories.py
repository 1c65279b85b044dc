from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_session
from app.models import Link, User
from app.schemas import CategoryRead

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryRead])
async def list_categories(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> list[CategoryRead]:
    """Categories in use by the current user, most recently touched first."""
    last_updated = func.max(Link.updated_at).label("last_updated")
    result = await db.execute(
        select(
            Link.category.label("name"),
            func.count(Link.id).label("link_count"),
            last_updated,
        )
        .where(Link.user_id == current_user.id)
        .group_by(Link.category)
        .order_by(last_updated.desc(), Link.category)
    )
    return [CategoryRead.model_validate(row, from_attributes=True) for row in result.all()]
