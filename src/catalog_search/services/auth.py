"""Admin credential service - password hashing and bearer-token sessions."""

import hashlib
import hmac
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from catalog_search.config import get_settings
from catalog_search.db.models import AdminSession, AdminUser

logger = logging.getLogger(__name__)

HASH_ALGORITHM = "pbkdf2_sha256"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def hash_password(password: str, iterations: Optional[int] = None) -> str:
    """Hash a password as ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``."""
    if iterations is None:
        iterations = get_settings().password_hash_iterations
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), iterations)
    return f"{HASH_ALGORITHM}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash in constant time."""
    try:
        algorithm, iterations, salt, expected = password_hash.split("$")
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM:
        return False

    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt.encode(), rounds)
    return hmac.compare_digest(digest.hex(), expected)


def generate_token() -> str:
    """Random 64-character hex session token."""
    return secrets.token_hex(32)


def parse_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer ") :].strip()
    return token or None


async def count_admins(session: AsyncSession) -> int:
    result = await session.execute(select(func.count(AdminUser.id)))
    return result.scalar_one()


async def get_user_by_login(session: AsyncSession, login: str) -> Optional[AdminUser]:
    """Find a user by username or email."""
    result = await session.execute(
        select(AdminUser).where(or_(AdminUser.username == login, AdminUser.email == login))
    )
    return result.scalars().first()


async def create_admin(
    session: AsyncSession,
    username: str,
    email: str,
    password: str,
) -> AdminUser:
    """Create an admin user. Caller checks for duplicates."""
    user = AdminUser(username=username, email=email, password_hash=hash_password(password))
    session.add(user)
    await session.flush()
    await session.refresh(user)
    logger.info(f"Created admin user {username}")
    return user


async def authenticate(session: AsyncSession, login: str, password: str) -> Optional[AdminUser]:
    """Return the user if the credentials are valid."""
    user = await get_user_by_login(session, login)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


async def create_session(session: AsyncSession, user: AdminUser) -> AdminSession:
    """Open a new session for a user and purge expired ones."""
    now = utcnow()
    ttl = timedelta(hours=get_settings().session_ttl_hours)

    await session.execute(
        delete(AdminSession)
        .where(AdminSession.expires_at < now)
        .execution_options(synchronize_session="fetch")
    )

    admin_session = AdminSession(
        user_id=user.id,
        token=generate_token(),
        expires_at=now + ttl,
        last_activity=now,
    )
    session.add(admin_session)
    user.last_login = now
    await session.flush()
    logger.info(f"Admin {user.username} logged in")
    return admin_session


async def get_active_session(session: AsyncSession, token: str) -> Optional[AdminSession]:
    """Look up an unexpired session by token, touching its last activity."""
    result = await session.execute(
        select(AdminSession)
        .options(selectinload(AdminSession.user))
        .where(AdminSession.token == token, AdminSession.expires_at > utcnow())
    )
    admin_session = result.scalar_one_or_none()
    if admin_session is not None:
        admin_session.last_activity = utcnow()
        await session.flush()
    return admin_session


async def end_session(session: AsyncSession, token: str) -> None:
    """Delete a session (logout)."""
    await session.execute(
        delete(AdminSession)
        .where(AdminSession.token == token)
        .execution_options(synchronize_session="fetch")
    )


async def change_password(
    session: AsyncSession,
    user: AdminUser,
    new_password: str,
    keep_token: str,
) -> None:
    """Set a new password and end every other session of the user."""
    user.password_hash = hash_password(new_password)
    await session.execute(
        delete(AdminSession).where(
            AdminSession.user_id == user.id,
            AdminSession.token != keep_token,
        )
        .execution_options(synchronize_session="fetch")
    )
    await session.flush()
    logger.info(f"Admin {user.username} changed password")
