"""Backend services for Travel Story.

Services:
- repository: persistence boundary for users and stories
- access_control: story permissions and collaborator management
- story_service: travel story use cases
- account_service: registration and login
- image_store: story photo storage

Usage:
    from travelstory.services import StoryService, StoryDraft

    service = StoryService(db, image_store, settings.placeholder_image_url)
    story = await service.create_story(user_id, StoryDraft(...))
"""

from .access_control import AccessControl, authorize_owner, can_view
from .account_service import AccountService
from .errors import (
    AlreadyCollaboratorError,
    InvalidCredentialsError,
    NotACollaboratorError,
    PermissionDeniedError,
    SelfInviteError,
    StoryNotFoundError,
    StoryServiceError,
    StoryValidationError,
    UserExistsError,
    UserNotFoundError,
)
from .image_store import ImageNotFoundError, LocalImageStore
from .repository import StoryRepository, UserRepository
from .story_service import StoryDraft, StoryService, from_epoch_millis

__all__ = [
    # Access Control
    "AccessControl",
    "authorize_owner",
    "can_view",
    # Services
    "AccountService",
    "StoryService",
    "StoryDraft",
    "from_epoch_millis",
    # Repositories
    "StoryRepository",
    "UserRepository",
    # Images
    "LocalImageStore",
    "ImageNotFoundError",
    # Errors
    "StoryServiceError",
    "StoryValidationError",
    "StoryNotFoundError",
    "UserNotFoundError",
    "UserExistsError",
    "InvalidCredentialsError",
    "AlreadyCollaboratorError",
    "NotACollaboratorError",
    "SelfInviteError",
    "PermissionDeniedError",
]
