"""Shared request/response schemas.

Wire names are camelCase (``visitDate``, ``isFavourite``); the story text is
sent as ``story`` and the location list as ``visitedLocation``.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from travelstory.models.story import CollaboratorRole, SharingStatus, TravelStory


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(CamelModel):
    """Simple message response."""

    message: str


class CollaboratorResponse(CamelModel):
    """Collaborator identity resolved for display."""

    id: int
    full_name: str
    email: str
    role: CollaboratorRole


class StoryResponse(CamelModel):
    """Travel story as returned to clients."""

    id: int
    user_id: int
    title: str
    narrative: str = Field(alias="story")
    visited_locations: list[str] = Field(alias="visitedLocation")
    image_url: str
    visit_date: datetime
    is_favourite: bool
    sharing_status: SharingStatus
    collaborators: list[CollaboratorResponse]
    created_at: datetime

    @field_serializer("visit_date", "created_at")
    def _serialize_utc(self, value: datetime) -> str:
        # SQLite hands back naive datetimes; everything is stored as UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.isoformat()


class StoryEnvelope(CamelModel):
    story: StoryResponse
    message: str = ""


class StoryListEnvelope(CamelModel):
    stories: list[StoryResponse]


def story_to_response(story: TravelStory) -> StoryResponse:
    """Convert story model to response."""
    return StoryResponse(
        id=story.id,
        user_id=story.user_id,
        title=story.title,
        narrative=story.narrative or "",
        visited_locations=story.visited_locations,
        image_url=story.image_url,
        visit_date=story.visit_date,
        is_favourite=story.is_favourite,
        sharing_status=story.sharing_status,
        collaborators=[
            CollaboratorResponse(
                id=c.user_id,
                full_name=c.user.full_name,
                email=c.user.email,
                role=c.role,
            )
            for c in story.collaborators
        ],
        created_at=story.created_at,
    )


def stories_to_response(stories: list[TravelStory]) -> StoryListEnvelope:
    return StoryListEnvelope(stories=[story_to_response(s) for s in stories])
