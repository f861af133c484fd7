"""
Request authentication seam.

Resolves the current user from an optional bearer JWT. Token issuing
lives elsewhere in production; ``create_access_token`` exists for
tooling and tests.
"""

from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger

from app.core.config import settings

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(user_id: str, expires_minutes: int | None = None) -> str:
    """Issue a signed access token whose subject is the user ID."""
    minutes = expires_minutes
    if minutes is None:
        minutes = settings.jwt_access_token_expire_minutes
    payload = {
        "sub": user_id,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_user_id(token: str) -> str | None:
    """Return the token subject, or None if the token is not valid."""
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected access token: {e}")
        return None

    subject = payload.get("sub")
    return str(subject) if subject else None


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str | None:
    """FastAPI dependency: current user ID, or None for anonymous requests."""
    if credentials is None:
        return None
    return decode_user_id(credentials.credentials)
