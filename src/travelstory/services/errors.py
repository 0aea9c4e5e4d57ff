"""Service-layer exceptions.

Each error carries the HTTP status it maps to so the API layer can translate
it without knowing the individual types.
"""


class StoryServiceError(Exception):
    """Base exception for travel story errors."""

    status_code: int = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class StoryValidationError(StoryServiceError, ValueError):
    """Missing or malformed required field."""

    status_code = 400


class StoryNotFoundError(StoryServiceError):
    """No story under the requested key (missing or not visible to the user)."""

    status_code = 404

    def __init__(self, message: str = "Travel story not found"):
        super().__init__(message)


class UserNotFoundError(StoryServiceError):
    """No user with the given identity."""

    status_code = 404


class InvalidCredentialsError(StoryServiceError):
    """Login failed."""

    status_code = 400


class UserExistsError(StoryServiceError):
    """An account with this email already exists."""

    status_code = 400

    def __init__(self, message: str = "User already exists"):
        super().__init__(message)


class AlreadyCollaboratorError(StoryServiceError):
    """User is already in the story's collaborator set."""

    status_code = 400

    def __init__(self, message: str = "User is already a collaborator"):
        super().__init__(message)


class NotACollaboratorError(StoryServiceError):
    """User is not in the story's collaborator set."""

    status_code = 400

    def __init__(self, message: str = "User is not a collaborator"):
        super().__init__(message)


class SelfInviteError(StoryServiceError):
    """Owner tried to add themselves as a collaborator."""

    status_code = 400

    def __init__(self, message: str = "Story owner cannot be added as a collaborator"):
        super().__init__(message)


class PermissionDeniedError(StoryServiceError):
    """User lacks the required permission."""

    status_code = 403


__all__ = [
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
