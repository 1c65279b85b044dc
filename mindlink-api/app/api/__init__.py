from fastapi import APIRouter

from app.api.v1 import activities, categories, instagram, links, users

api_router = APIRouter(prefix="/api")
api_router.include_router(instagram.router)
api_router.include_router(links.router)
api_router.include_router(categories.router)
api_router.include_router(activities.router)
api_router.include_router(users.router)

__all__ = ["api_router"]
