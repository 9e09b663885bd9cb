"""Admin authentication endpoints.

Endpoints:
- POST /auth/login - exchange credentials for a bearer token
- POST /auth/logout - end the current session
- GET /auth/verify - check a token
- POST /auth/register - create an admin (open only while none exist)
- POST /auth/change-password - change the current admin's password
"""

from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Header, HTTPException, status
from pydantic import BaseModel, EmailStr, Field
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_search.api.deps import require_admin_session
from catalog_search.db.base import get_db
from catalog_search.db.models import AdminSession, AdminUser
from catalog_search.services.auth import (
    authenticate,
    change_password,
    count_admins,
    create_admin,
    create_session,
    end_session,
    get_active_session,
    parse_bearer_token,
    verify_password,
)

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    """Login with username or email."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminUserResponse(BaseModel):
    """Public admin user info."""

    id: UUID
    username: str
    email: str
    last_login: datetime | None = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Successful login."""

    success: bool = True
    token: str
    expires_at: datetime
    user: AdminUserResponse


class VerifyResponse(BaseModel):
    """Token check result."""

    valid: bool
    user: AdminUserResponse
    expires_at: datetime


class RegisterRequest(BaseModel):
    """New admin account."""

    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8)


class RegisterResponse(BaseModel):
    """Created admin account."""

    success: bool = True
    message: str
    user: AdminUserResponse


class ChangePasswordRequest(BaseModel):
    """Password change."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)


class MessageResponse(BaseModel):
    """Generic success message."""

    success: bool = True
    message: str


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """Log in and receive a bearer token valid for the configured TTL."""
    user = await authenticate(db, credentials.username, credentials.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )

    admin_session = await create_session(db, user)
    return LoginResponse(
        token=admin_session.token,
        expires_at=admin_session.expires_at,
        user=AdminUserResponse.model_validate(user),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """End the session identified by the bearer token."""
    token = parse_bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing authorization header",
        )

    await end_session(db, token)
    return MessageResponse(message="Logged out successfully")


@router.get("/verify", response_model=VerifyResponse)
async def verify(
    admin_session: AdminSession = Depends(require_admin_session),
) -> VerifyResponse:
    """Check that a bearer token is valid."""
    return VerifyResponse(
        valid=True,
        user=AdminUserResponse.model_validate(admin_session.user),
        expires_at=admin_session.expires_at,
    )


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest,
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> RegisterResponse:
    """Create an admin account.

    The first account can be created without authentication; after that an
    existing admin must make the request.
    """
    if await count_admins(db) > 0:
        token = parse_bearer_token(authorization)
        if token is None or await get_active_session(db, token) is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Admin authentication required",
            )

    existing = await db.execute(
        select(AdminUser.id).where(
            or_(AdminUser.username == data.username, AdminUser.email == data.email)
        )
    )
    if existing.first() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username or email already exists",
        )

    user = await create_admin(db, data.username, data.email, data.password)
    return RegisterResponse(
        message="User created successfully",
        user=AdminUserResponse.model_validate(user),
    )


@router.post("/change-password", response_model=MessageResponse)
async def change_admin_password(
    data: ChangePasswordRequest,
    admin_session: AdminSession = Depends(require_admin_session),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Change the password; every other session of this admin is ended."""
    user = admin_session.user
    if not verify_password(data.current_password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect",
        )

    await change_password(db, user, data.new_password, keep_token=admin_session.token)
    return MessageResponse(message="Password changed successfully")
