"""Authentication router for registration and login.

Endpoints for account creation, login and the current user's profile.
Tokens are JWT access tokens carrying the user id in ``sub``.
"""

from datetime import datetime

from fastapi import APIRouter, status
from pydantic import EmailStr, Field

from travelstory.api.deps import AccountServiceDep, AppSettings, CurrentUserId
from travelstory.api.exceptions import UnauthorizedError
from travelstory.api.schemas import CamelModel
from travelstory.core.security import create_access_token
from travelstory.services import UserNotFoundError

router = APIRouter()


# =============================================================================
# Schemas
# =============================================================================


class CreateAccountRequest(CamelModel):
    """User registration request."""

    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class LoginRequest(CamelModel):
    """User login request."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserSummary(CamelModel):
    full_name: str
    email: str


class AuthResponse(CamelModel):
    """Access token together with the user it was issued for."""

    error: bool = False
    user: UserSummary
    access_token: str
    message: str


class UserProfile(CamelModel):
    id: int
    full_name: str
    email: str
    created_at: datetime


class UserResponse(CamelModel):
    user: UserProfile
    message: str = ""


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "/create-account",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_account(
    request: CreateAccountRequest,
    accounts: AccountServiceDep,
    settings: AppSettings,
) -> AuthResponse:
    """Register a new user and return an access token.

    Raises:
        UserExistsError: If the email is already registered
    """
    user = await accounts.register(request.full_name, request.email, request.password)
    return AuthResponse(
        user=UserSummary(full_name=user.full_name, email=user.email),
        access_token=create_access_token(user.id, settings=settings),
        message="Registration successful",
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    accounts: AccountServiceDep,
    settings: AppSettings,
) -> AuthResponse:
    """Authenticate with email and password.

    Raises:
        InvalidCredentialsError: If the user is unknown or the password is wrong
    """
    user = await accounts.authenticate(request.email, request.password)
    return AuthResponse(
        user=UserSummary(full_name=user.full_name, email=user.email),
        access_token=create_access_token(user.id, settings=settings),
        message="Login successful",
    )


@router.get("/get-user", response_model=UserResponse)
async def get_user(
    user_id: CurrentUserId,
    accounts: AccountServiceDep,
) -> UserResponse:
    """Get the authenticated user's profile."""
    try:
        user = await accounts.get_user(user_id)
    except UserNotFoundError:
        raise UnauthorizedError("User not found")

    return UserResponse(
        user=UserProfile(
            id=user.id,
            full_name=user.full_name,
            email=user.email,
            created_at=user.created_at,
        ),
    )
