"""Version 1 API endpoints."""

from .endpoints import (
    auth_router,
    courses_router,
    nonce_router,
    purchases_router,
    users_router,
)

__all__ = [
    "auth_router",
    "courses_router",
    "nonce_router",
    "purchases_router",
    "users_router",
]
