"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    categories_router,
    comments_router,
    constituencies_router,
    posts_router,
    users_router,
)

__all__ = [
    "auth_router",
    "categories_router",
    "comments_router",
    "constituencies_router",
    "posts_router",
    "users_router",
]
