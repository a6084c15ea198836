"""API routers."""

from .admin import router as admin_router
from .chat import router as chat_router
from .feed import router as feed_router
from .health import router as health_router
from .jobs import router as jobs_router
from .search import router as search_router

__all__ = [
    "admin_router",
    "chat_router",
    "feed_router",
    "health_router",
    "jobs_router",
    "search_router",
]
