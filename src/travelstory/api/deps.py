"""FastAPI dependencies for dependency injection.

Provides reusable dependencies for authentication, database sessions and
services across endpoints.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from travelstory.api.exceptions import ForbiddenError, UnauthorizedError
from travelstory.core.config import Settings
from travelstory.core.security import decode_access_token
from travelstory.services import AccountService, LocalImageStore, StoryService

# Security scheme
security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


AppSettings = Annotated[Settings, Depends(get_app_settings)]


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session from the database opened at startup."""
    async for session in request.app.state.database.session():
        yield session


# Database session dependency
DBSession = Annotated[AsyncSession, Depends(get_session)]


def get_image_store(settings: AppSettings) -> LocalImageStore:
    return LocalImageStore(settings.uploads_dir, settings.public_base_url)


async def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: AppSettings,
) -> int:
    """Get the authenticated user's ID from the bearer token.

    Raises:
        UnauthorizedError: If no token was sent (401)
        ForbiddenError: If the token is invalid or expired (403)
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    payload = decode_access_token(credentials.credentials, settings)
    if payload is None:
        raise ForbiddenError()

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise ForbiddenError()


CurrentUserId = Annotated[int, Depends(get_current_user_id)]


def get_story_service(
    db: DBSession,
    settings: AppSettings,
    image_store: Annotated[LocalImageStore, Depends(get_image_store)],
) -> StoryService:
    return StoryService(db, image_store, settings.placeholder_image_url)


def get_account_service(db: DBSession, settings: AppSettings) -> AccountService:
    return AccountService(db, settings.bcrypt_rounds)


StoryServiceDep = Annotated[StoryService, Depends(get_story_service)]
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
