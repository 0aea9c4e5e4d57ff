"""Database models for Travel Story.

SQLAlchemy models for:
- Users
- Travel stories and their ordered visited locations
- Story collaborators

All models use async SQLAlchemy (asyncpg for PostgreSQL, aiosqlite for tests).
"""

from .database import Base, Database
from .story import (
    CollaboratorRole,
    SharingStatus,
    StoryCollaborator,
    StoryLocation,
    TravelStory,
)
from .user import User

__all__ = [
    # Database
    "Base",
    "Database",
    # User models
    "User",
    # Story models
    "TravelStory",
    "StoryLocation",
    "StoryCollaborator",
    "CollaboratorRole",
    "SharingStatus",
]
