"""Travel stories router.

Endpoints for creating, editing, sharing and querying travel stories. Paths
and field names match what the existing web client sends.
"""

from datetime import datetime
from typing import Annotated, Any

from fastapi import APIRouter, Query, status
from pydantic import Field, field_validator

from travelstory.api.deps import CurrentUserId, StoryServiceDep
from travelstory.api.schemas import (
    CamelModel,
    MessageResponse,
    StoryEnvelope,
    StoryListEnvelope,
    StoryResponse,
    stories_to_response,
    story_to_response,
)
from travelstory.services import StoryDraft, from_epoch_millis

router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================


class StoryWriteRequest(CamelModel):
    """Story content sent when creating or editing a story."""

    title: str = Field(..., min_length=1, max_length=255)
    narrative: str | None = Field(default=None, alias="story")
    visited_locations: list[Annotated[str, Field(max_length=255)]] = Field(
        ..., alias="visitedLocation"
    )
    image_url: str | None = Field(default=None, max_length=500)
    visit_date: datetime = Field(..., description="Epoch offset in milliseconds")

    @field_validator("visited_locations", mode="before")
    @classmethod
    def _single_location(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("visit_date", mode="before")
    @classmethod
    def _parse_visit_date(cls, value: Any) -> datetime:
        return from_epoch_millis(value)

    def to_draft(self) -> StoryDraft:
        return StoryDraft(
            title=self.title,
            narrative=self.narrative or "",
            visited_locations=self.visited_locations,
            image_url=self.image_url,
            visit_date=self.visit_date,
        )


class FavouriteRequest(CamelModel):
    is_favourite: bool


class CollaboratorRequest(CamelModel):
    collaborator_email: str = Field(..., min_length=1, max_length=255)


class CollaboratorChangeResponse(CamelModel):
    message: str
    travel_story: StoryResponse


# =============================================================================
# Story lifecycle
# =============================================================================


@router.post(
    "/add-travel-story",
    response_model=StoryEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def add_travel_story(
    request: StoryWriteRequest,
    user_id: CurrentUserId,
    service: StoryServiceDep,
) -> StoryEnvelope:
    """Create a story owned by the authenticated user."""
    story = await service.create_story(user_id, request.to_draft())
    return StoryEnvelope(story=story_to_response(story), message="Added successfully")


@router.put("/edit-story/{story_id}", response_model=StoryEnvelope)
async def edit_story(
    story_id: int,
    request: StoryWriteRequest,
    user_id: CurrentUserId,
    service: StoryServiceDep,
) -> StoryEnvelope:
    """Replace a story's content.

    A missing image falls back to the placeholder image.

    Raises:
        StoryNotFoundError: If the story doesn't exist or the user doesn't own it
    """
    story = await service.edit_story(user_id, story_id, request.to_draft())
    return StoryEnvelope(story=story_to_response(story), message="Update successful")


@router.delete("/delete-story/{story_id}", response_model=MessageResponse)
async def delete_story(
    story_id: int,
    user_id: CurrentUserId,
    service: StoryServiceDep,
) -> MessageResponse:
    """Delete a story and release its image."""
    await service.delete_story(user_id, story_id)
    return MessageResponse(message="Travel story deleted successfully")


@router.put("/update-is-Favourite/{story_id}", response_model=StoryEnvelope)
async def update_is_favourite(
    story_id: int,
    request: FavouriteRequest,
    user_id: CurrentUserId,
    service: StoryServiceDep,
) -> StoryEnvelope:
    """Set or clear a story's favourite flag."""
    story = await service.set_favourite(user_id, story_id, request.is_favourite)
    return StoryEnvelope(story=story_to_response(story), message="Update successful")


# =============================================================================
# Sharing
# =============================================================================


@router.put("/add-collaborator/{story_id}", response_model=CollaboratorChangeResponse)
async def add_collaborator(
    story_id: int,
    request: CollaboratorRequest,
    user_id: CurrentUserId,
    service: StoryServiceDep,
) -> CollaboratorChangeResponse:
    """Invite a user, by email, to view a story.

    Only the story owner can invite collaborators.
    """
    story = await service.add_collaborator(user_id, story_id, request.collaborator_email)
    return CollaboratorChangeResponse(
        message="Collaborator added successfully",
        travel_story=story_to_response(story),
    )


@router.put("/remove-collaborator/{story_id}", response_model=CollaboratorChangeResponse)
async def remove_collaborator(
    story_id: int,
    request: CollaboratorRequest,
    user_id: CurrentUserId,
    service: StoryServiceDep,
) -> CollaboratorChangeResponse:
    """Revoke a collaborator's access to a story."""
    story = await service.remove_collaborator(user_id, story_id, request.collaborator_email)
    return CollaboratorChangeResponse(
        message="Collaborator removed successfully",
        travel_story=story_to_response(story),
    )


# =============================================================================
# Queries
# =============================================================================


@router.get("/get-all-story", response_model=StoryListEnvelope)
async def get_all_stories(
    user_id: CurrentUserId,
    service: StoryServiceDep,
) -> StoryListEnvelope:
    """List the user's stories, favourites first."""
    return stories_to_response(await service.list_all(user_id))


@router.get("/get-travel-story/{story_id}", response_model=StoryEnvelope)
async def get_travel_story(
    story_id: int,
    user_id: CurrentUserId,
    service: StoryServiceDep,
) -> StoryEnvelope:
    """Get a story the user owns or collaborates on, with collaborators resolved."""
    story = await service.get_by_id(user_id, story_id)
    return StoryEnvelope(story=story_to_response(story))


@router.get("/search", response_model=StoryListEnvelope)
async def search_stories(
    user_id: CurrentUserId,
    service: StoryServiceDep,
    query: Annotated[str | None, Query()] = None,
) -> StoryListEnvelope:
    """Case-insensitive search over title, story text and visited locations."""
    return stories_to_response(await service.search_stories(user_id, query))


@router.get("/travel-stories/filter", response_model=StoryListEnvelope)
async def filter_stories(
    user_id: CurrentUserId,
    service: StoryServiceDep,
    start_date: Annotated[str, Query(alias="startDate")],
    end_date: Annotated[str, Query(alias="endDate")],
) -> StoryListEnvelope:
    """Stories visited between two epoch-millisecond bounds, inclusive."""
    stories = await service.filter_by_date_range(
        user_id,
        from_epoch_millis(start_date),
        from_epoch_millis(end_date),
    )
    return stories_to_response(stories)
