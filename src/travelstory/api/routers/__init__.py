"""API routers for different endpoint groups.

Routers:
- auth: Account creation, login and profile
- health: Health check endpoint
- stories: Travel story management and sharing
"""

from .auth import router as auth_router
from .health import router as health_router
from .stories import router as stories_router

__all__ = [
    "auth_router",
    "health_router",
    "stories_router",
]
