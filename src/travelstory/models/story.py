"""Travel story, location and collaborator models.

SQLAlchemy models for stories and their sharing state.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base
from .user import utcnow

if TYPE_CHECKING:
    from .user import User


class CollaboratorRole(str, Enum):
    """Roles for story collaborators."""

    VIEWER = "viewer"  # Read-only access
    EDITOR = "editor"  # Recorded for future content permissions


class SharingStatus(str, Enum):
    """Whether a story has any collaborators."""

    PRIVATE = "private"
    SHARED = "shared"


class TravelStory(Base):
    """Travel story model - the central journal entry.

    The owner (``user_id``) is set at creation and never changes.
    """

    __tablename__ = "travel_stories"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )

    title: Mapped[str] = mapped_column(String(255))
    narrative: Mapped[str] = mapped_column(Text, default="")
    image_url: Mapped[str] = mapped_column(String(500))
    visit_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    is_favourite: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    # Relationships
    user: Mapped[User] = relationship("User", back_populates="stories", lazy="raise")
    locations: Mapped[list[StoryLocation]] = relationship(
        "StoryLocation",
        back_populates="story",
        order_by="StoryLocation.position",
        lazy="selectin",
        cascade="all, delete-orphan",
    )
    collaborators: Mapped[list[StoryCollaborator]] = relationship(
        "StoryCollaborator",
        back_populates="story",
        order_by="StoryCollaborator.id",
        lazy="selectin",
        cascade="all, delete-orphan",
    )

    @property
    def visited_locations(self) -> list[str]:
        return [location.name for location in self.locations]

    @visited_locations.setter
    def visited_locations(self, names: list[str]) -> None:
        self.locations = [
            StoryLocation(position=position, name=name)
            for position, name in enumerate(names)
        ]

    @property
    def sharing_status(self) -> SharingStatus:
        return SharingStatus.SHARED if self.collaborators else SharingStatus.PRIVATE

    def find_collaborator(self, user_id: int) -> StoryCollaborator | None:
        """Return the collaborator entry for ``user_id``, if any."""
        return next((c for c in self.collaborators if c.user_id == user_id), None)

    def __repr__(self) -> str:
        return f"<TravelStory(id={self.id}, title='{self.title}', user_id={self.user_id})>"


class StoryLocation(Base):
    """One entry of a story's ordered visited-locations list."""

    __tablename__ = "story_locations"

    id: Mapped[int] = mapped_column(primary_key=True)
    story_id: Mapped[int] = mapped_column(
        ForeignKey("travel_stories.id", ondelete="CASCADE"),
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer)
    name: Mapped[str] = mapped_column(String(255))

    story: Mapped[TravelStory] = relationship("TravelStory", back_populates="locations")

    def __repr__(self) -> str:
        return f"<StoryLocation(story_id={self.story_id}, position={self.position}, name='{self.name}')>"


class StoryCollaborator(Base):
    """Junction table granting a user shared access to a story."""

    __tablename__ = "story_collaborators"
    __table_args__ = (
        UniqueConstraint("story_id", "user_id", name="uq_story_collaborators_story_user"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    story_id: Mapped[int] = mapped_column(
        ForeignKey("travel_stories.id", ondelete="CASCADE"),
        index=True,
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    role: Mapped[CollaboratorRole] = mapped_column(
        SQLEnum(
            CollaboratorRole,
            name="collaborator_role",
            values_callable=lambda roles: [role.value for role in roles],
        ),
        default=CollaboratorRole.VIEWER,
    )
    invited_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )

    # Relationships
    story: Mapped[TravelStory] = relationship("TravelStory", back_populates="collaborators")
    user: Mapped[User] = relationship("User", lazy="selectin")

    def can_edit(self) -> bool:
        """Check if the role would allow content edits."""
        return self.role == CollaboratorRole.EDITOR

    def __repr__(self) -> str:
        return f"<StoryCollaborator(story_id={self.story_id}, user_id={self.user_id}, role={self.role})>"
