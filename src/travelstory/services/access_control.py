"""Access control for travel stories.

Decides what a user may do with a story and applies collaborator-set
changes while keeping its invariants:

- the owner is fixed and is never listed as a collaborator
- a user appears at most once in a story's collaborator set
- only the owner may add or remove collaborators

Write access is owner-only: the story service looks stories up scoped to
their owner, and ``authorize_owner`` guards sharing changes. Collaborator
roles are stored but not consulted; a collaborator of any role may view the
story.
"""

import logging
from typing import Protocol

from travelstory.models.story import CollaboratorRole, StoryCollaborator, TravelStory
from travelstory.models.user import User

from .errors import (
    AlreadyCollaboratorError,
    NotACollaboratorError,
    PermissionDeniedError,
    SelfInviteError,
    UserNotFoundError,
)

logger = logging.getLogger(__name__)


class UserLookup(Protocol):
    async def get_by_email(self, email: str) -> User | None: ...


class StoryWriter(Protocol):
    async def save(self, story: TravelStory) -> TravelStory: ...


def authorize_owner(user_id: int, story: TravelStory) -> None:
    """Require ``user_id`` to own ``story``.

    Raises:
        PermissionDeniedError: If the user is not the owner
    """
    if story.user_id != user_id:
        raise PermissionDeniedError("Only the story owner can perform this action")


def can_view(user_id: int, story: TravelStory) -> bool:
    """Owner or any collaborator may read the story."""
    return story.user_id == user_id or story.find_collaborator(user_id) is not None


class AccessControl:
    """Collaborator management for a single story at a time."""

    def __init__(self, users: UserLookup, stories: StoryWriter):
        self.users = users
        self.stories = stories

    async def _resolve(self, email: str) -> User:
        user = await self.users.get_by_email(email)
        if user is None:
            raise UserNotFoundError("Collaborator not found")
        return user

    async def add_collaborator(
        self,
        story: TravelStory,
        owner_id: int,
        collaborator_email: str,
    ) -> TravelStory:
        """Invite a user to a story as a viewer.

        Args:
            story: Story to share
            owner_id: Acting user (must be the owner)
            collaborator_email: Email of the user to invite

        Returns:
            The persisted story

        Raises:
            PermissionDeniedError: If the acting user is not the owner
            UserNotFoundError: If no user has that email
            AlreadyCollaboratorError: If the user is already a collaborator
            SelfInviteError: If the user is the owner
        """
        authorize_owner(owner_id, story)
        user = await self._resolve(collaborator_email)

        if story.find_collaborator(user.id) is not None:
            raise AlreadyCollaboratorError()

        if user.id == story.user_id:
            raise SelfInviteError()

        story.collaborators.append(
            StoryCollaborator(user_id=user.id, user=user, role=CollaboratorRole.VIEWER)
        )
        await self.stories.save(story)

        logger.info(f"Added user {user.id} to story {story.id} as viewer")
        return story

    async def remove_collaborator(
        self,
        story: TravelStory,
        owner_id: int,
        collaborator_email: str,
    ) -> TravelStory:
        """Revoke a user's shared access to a story.

        Raises:
            PermissionDeniedError: If the acting user is not the owner
            UserNotFoundError: If no user has that email
            NotACollaboratorError: If the user is not a collaborator
        """
        authorize_owner(owner_id, story)
        user = await self._resolve(collaborator_email)

        entry = story.find_collaborator(user.id)
        if entry is None:
            raise NotACollaboratorError()

        story.collaborators.remove(entry)
        await self.stories.save(story)

        logger.info(f"Removed user {user.id} from story {story.id}")
        return story


__all__ = [
    "AccessControl",
    "authorize_owner",
    "can_view",
]
