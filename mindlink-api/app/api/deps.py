from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import Depends, Header, HTTPException, Request, status

from app.database import get_db
from app.models.user import User
from app.services.metadata import MetadataService


async def get_session(session: AsyncSession = Depends(get_db)) -> AsyncSession:
    return session


async def get_current_user(
    x_api_key: str = Header(..., alias="X-API-Key"),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get the current user from the X-API-Key header."""
    result = await db.execute(select(User).where(User.api_key == x_api_key))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "ApiKey"},
        )
    return user


def get_metadata_service(request: Request) -> MetadataService:
    """The process-wide extractor created at startup."""
    return request.app.state.metadata_service
