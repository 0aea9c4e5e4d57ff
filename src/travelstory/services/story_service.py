"""Story service: travel story use cases.

Combines the story repository with access control. Mutations use an
ownership-scoped lookup and reads require ``can_view``, so a story the user
may not touch is reported exactly like a missing one.
"""

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from travelstory.models.story import TravelStory

from .access_control import AccessControl, can_view
from .errors import StoryNotFoundError, StoryValidationError
from .image_store import LocalImageStore
from .repository import StoryRepository, UserRepository

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def from_epoch_millis(value: Any) -> datetime:
    """Convert an epoch offset in milliseconds (int or numeric string) to a UTC datetime.

    Raises:
        StoryValidationError: If the value is not an integer millisecond offset
    """
    if isinstance(value, bool):
        raise StoryValidationError("Expected an epoch timestamp in milliseconds")
    try:
        millis = int(value)
    except (TypeError, ValueError):
        raise StoryValidationError("Expected an epoch timestamp in milliseconds")
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError:
        raise StoryValidationError("Timestamp is out of range")


@dataclass
class StoryDraft:
    """Content fields supplied when creating or editing a story."""

    title: str
    visit_date: datetime
    visited_locations: list[str] = field(default_factory=list)
    narrative: str = ""
    image_url: str | None = None


class StoryService:
    """Service for travel story use cases."""

    def __init__(
        self,
        db: AsyncSession,
        image_store: LocalImageStore,
        placeholder_image_url: str,
    ):
        self.db = db
        self.stories = StoryRepository(db)
        self.users = UserRepository(db)
        self.access = AccessControl(self.users, self.stories)
        self.image_store = image_store
        self.placeholder_image_url = placeholder_image_url

    async def _get_owned(self, story_id: int, user_id: int) -> TravelStory:
        story = await self.stories.get_owned(story_id, user_id)
        if story is None:
            raise StoryNotFoundError()
        return story

    @staticmethod
    def _validate(draft: StoryDraft) -> None:
        if not draft.title or not draft.title.strip():
            raise StoryValidationError("Title is required")
        if draft.visited_locations is None:
            raise StoryValidationError("Visited locations are required")
        if draft.visit_date is None:
            raise StoryValidationError("Visit date is required")

    # =========================================================================
    # Story lifecycle
    # =========================================================================

    async def create_story(self, owner_id: int, draft: StoryDraft) -> TravelStory:
        """Create a story owned by ``owner_id``.

        Raises:
            StoryValidationError: If a required field is missing
        """
        self._validate(draft)
        if not draft.image_url:
            raise StoryValidationError("Image is required")

        story = TravelStory(
            user_id=owner_id,
            title=draft.title,
            narrative=draft.narrative or "",
            visited_locations=list(draft.visited_locations),
            image_url=draft.image_url,
            visit_date=draft.visit_date,
            is_favourite=False,
            collaborators=[],
        )
        await self.stories.add(story)
        await self.db.commit()

        logger.info(f"User {owner_id} created story {story.id}")
        return story

    async def edit_story(self, user_id: int, story_id: int, draft: StoryDraft) -> TravelStory:
        """Replace the content fields of an owned story.

        Raises:
            StoryNotFoundError: If the story is missing or not owned by the user
            StoryValidationError: If a required field is missing
        """
        self._validate(draft)
        story = await self._get_owned(story_id, user_id)

        story.title = draft.title
        story.narrative = draft.narrative or ""
        story.visited_locations = list(draft.visited_locations)
        story.image_url = draft.image_url or self.placeholder_image_url
        story.visit_date = draft.visit_date

        await self.stories.save(story)
        await self.db.commit()
        return story

    async def delete_story(self, user_id: int, story_id: int) -> None:
        """Delete an owned story and release its image.

        Image deletion is best effort: failures are logged and the story
        stays deleted.

        Raises:
            StoryNotFoundError: If the story is missing or not owned by the user
        """
        story = await self._get_owned(story_id, user_id)
        image_url = story.image_url

        await self.stories.delete(story)
        await self.db.commit()
        logger.info(f"User {user_id} deleted story {story_id}")

        try:
            await self.image_store.delete(image_url)
        except OSError as e:
            logger.warning(f"Failed to delete image for story {story_id}: {e}")

    async def set_favourite(self, user_id: int, story_id: int, is_favourite: bool) -> TravelStory:
        """Set the favourite flag of an owned story."""
        story = await self._get_owned(story_id, user_id)
        story.is_favourite = is_favourite

        await self.stories.save(story)
        await self.db.commit()
        return story

    # =========================================================================
    # Sharing
    # =========================================================================

    async def add_collaborator(self, user_id: int, story_id: int, email: str) -> TravelStory:
        story = await self._get_owned(story_id, user_id)
        await self.access.add_collaborator(story, user_id, email)
        await self.db.commit()
        return story

    async def remove_collaborator(self, user_id: int, story_id: int, email: str) -> TravelStory:
        story = await self._get_owned(story_id, user_id)
        await self.access.remove_collaborator(story, user_id, email)
        await self.db.commit()
        return story

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_by_id(self, user_id: int, story_id: int) -> TravelStory:
        """Get a story the user owns or collaborates on.

        Raises:
            StoryNotFoundError: If the story is missing or not visible to the user
        """
        story = await self.stories.get(story_id)
        if story is None or not can_view(user_id, story):
            raise StoryNotFoundError()
        return story

    async def list_all(self, user_id: int) -> list[TravelStory]:
        return await self.stories.list_owned(user_id)

    async def search_stories(self, user_id: int, query_text: str | None) -> list[TravelStory]:
        """Search owned stories by title, narrative or visited location.

        Raises:
            StoryValidationError: If the query is blank
        """
        if not query_text or not query_text.strip():
            raise StoryValidationError("query is required")
        return await self.stories.search(user_id, query_text)

    async def filter_by_date_range(
        self,
        user_id: int,
        start: datetime,
        end: datetime,
    ) -> list[TravelStory]:
        """Owned stories visited within ``[start, end]``."""
        return await self.stories.filter_by_visit_date(user_id, start, end)


__all__ = [
    "StoryDraft",
    "StoryService",
    "from_epoch_millis",
]
