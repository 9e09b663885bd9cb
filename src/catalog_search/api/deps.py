"""Shared API dependencies."""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_search.db.base import get_db
from catalog_search.db.models import AdminSession
from catalog_search.services.auth import get_active_session, parse_bearer_token


async def require_admin_session(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> AdminSession:
    """Resolve the bearer token to an active admin session, or 401."""
    token = parse_bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    admin_session = await get_active_session(db, token)
    if admin_session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return admin_session
