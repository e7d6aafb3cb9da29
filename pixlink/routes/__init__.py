from .health import router as health_router
from .users import router as users_router
from .images import router as images_router, share_router

__all__ = [
    "health_router",
    "users_router",
    "images_router",
    "share_router",
]
