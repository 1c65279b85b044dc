from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_current_user, get_metadata_service, get_session
from app.models import Link, User
from app.schemas import ActivityType, LinkCreate, LinkRead, LinkUpdate
from app.services.activity import changed_fields, record_activity
from app.services.links import build_link_fields
from app.services.metadata import MetadataService

router = APIRouter(prefix="/links", tags=["links"])


async def _get_owned_link(db: AsyncSession, link_id: UUID, user: User) -> Link:
    result = await db.execute(
        select(Link).where(Link.id == link_id, Link.user_id == user.id)
    )
    link = result.scalar_one_or_none()
    if not link:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Link not found"
        )
    return link


@router.get("", response_model=list[LinkRead])
async def list_links(
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
    category: Annotated[Optional[str], Query()] = None,
) -> list[LinkRead]:
    """List the current user's links, newest first, optionally in one category."""
    query = select(Link).where(Link.user_id == current_user.id)
    if category is not None:
        query = query.where(Link.category == category)
    result = await db.execute(query.order_by(Link.created_at.desc()))
    links = result.scalars().all()
    return [LinkRead.model_validate(link) for link in links]


@router.post("", response_model=LinkRead, status_code=status.HTTP_201_CREATED)
async def create_link(
    payload: LinkCreate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
    metadata_service: Annotated[MetadataService, Depends(get_metadata_service)],
) -> LinkRead:
    """Save a link, filling in title, tags and category where missing."""
    fields = await build_link_fields(payload, metadata_service)
    link = Link(
        user_id=current_user.id,
        url=fields.url,
        title=fields.title,
        description=fields.description,
        category=fields.category,
        tags=fields.tags,
        content_type=fields.content_type,
        thumbnail_url=fields.thumbnail_url,
        notes=fields.notes,
    )
    db.add(link)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Link already saved"
        )
    await db.refresh(link)

    created = LinkRead.model_validate(link)
    await record_activity(db, ActivityType.LINK_CREATED, link)
    return created


@router.get("/{link_id}", response_model=LinkRead)
async def get_link(
    link_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LinkRead:
    """Get a specific link by ID (must belong to current user)."""
    link = await _get_owned_link(db, link_id, current_user)
    return LinkRead.model_validate(link)


@router.patch("/{link_id}", response_model=LinkRead)
async def update_link(
    link_id: UUID,
    payload: LinkUpdate,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> LinkRead:
    """Update a link's details, pin or read state (must belong to current user)."""
    link = await _get_owned_link(db, link_id, current_user)

    # Update only provided fields
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    changes = changed_fields(link, updates.items())
    if not changes:
        return LinkRead.model_validate(link)

    await db.commit()
    await db.refresh(link)

    updated = LinkRead.model_validate(link)
    await record_activity(db, ActivityType.LINK_UPDATED, link, changes)
    return updated


@router.delete(
    "/{link_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_link(
    link_id: UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_session)],
) -> Response:
    """Delete a link (must belong to current user)."""
    link = await _get_owned_link(db, link_id, current_user)
    await db.delete(link)
    await db.commit()

    await record_activity(db, ActivityType.LINK_DELETED, link)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
