"""Persistence boundary for users and travel stories.

Every listing query is scoped to a single owner and ordered favourites first,
then by creation order.
"""

from datetime import datetime

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from travelstory.models.story import StoryLocation, TravelStory
from travelstory.models.user import User


def escape_like(text: str, escape: str = "\\") -> str:
    """Escape LIKE wildcards so ``text`` matches literally."""
    return (
        text.replace(escape, escape * 2)
        .replace("%", f"{escape}%")
        .replace("_", f"{escape}_")
    )


class UserRepository:
    """Credential store lookups."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        """Find a user by email, ignoring case."""
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.strip().lower())
        )
        return result.scalar_one_or_none()

    async def add(self, user: User) -> User:
        self.db.add(user)
        await self.db.flush()
        return user


class StoryRepository:
    """Story lookups, filters and mutations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _owned(self, owner_id: int) -> Select[tuple[TravelStory]]:
        return select(TravelStory).where(TravelStory.user_id == owner_id)

    async def _list(self, query: Select[tuple[TravelStory]]) -> list[TravelStory]:
        result = await self.db.execute(
            query.order_by(TravelStory.is_favourite.desc(), TravelStory.id)
        )
        return list(result.scalars().all())

    async def get(self, story_id: int) -> TravelStory | None:
        """Point lookup by id, regardless of owner."""
        result = await self.db.execute(
            select(TravelStory).where(TravelStory.id == story_id)
        )
        return result.scalar_one_or_none()

    async def get_owned(self, story_id: int, owner_id: int) -> TravelStory | None:
        """Ownership-scoped lookup: None both when missing and when not owned."""
        result = await self.db.execute(
            self._owned(owner_id).where(TravelStory.id == story_id)
        )
        return result.scalar_one_or_none()

    async def list_owned(self, owner_id: int) -> list[TravelStory]:
        return await self._list(self._owned(owner_id))

    async def search(self, owner_id: int, text: str) -> list[TravelStory]:
        """Case-insensitive substring match over title, narrative and locations."""
        pattern = f"%{escape_like(text)}%"
        query = self._owned(owner_id).where(
            or_(
                TravelStory.title.ilike(pattern, escape="\\"),
                TravelStory.narrative.ilike(pattern, escape="\\"),
                TravelStory.locations.any(StoryLocation.name.ilike(pattern, escape="\\")),
            )
        )
        return await self._list(query)

    async def filter_by_visit_date(
        self,
        owner_id: int,
        start: datetime,
        end: datetime,
    ) -> list[TravelStory]:
        """Owned stories with ``start <= visit_date <= end``."""
        query = self._owned(owner_id).where(
            TravelStory.visit_date >= start,
            TravelStory.visit_date <= end,
        )
        return await self._list(query)

    async def add(self, story: TravelStory) -> TravelStory:
        self.db.add(story)
        await self.db.flush()
        return story

    async def save(self, story: TravelStory) -> TravelStory:
        await self.db.flush()
        return story

    async def delete(self, story: TravelStory) -> None:
        await self.db.delete(story)
        await self.db.flush()


__all__ = [
    "StoryRepository",
    "UserRepository",
    "escape_like",
]
