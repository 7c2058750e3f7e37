"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .courses import router as courses_router
from .nonce import router as nonce_router
from .purchases import router as purchases_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "courses_router",
    "nonce_router",
    "purchases_router",
    "users_router",
]
