"""
Bearer token verification.

Tokens are issued by the account service; this module only checks the
signature and expiry and hands the ``sub`` claim to the routes as the
owner id.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from corphub.core.config import Settings, get_settings
from corphub.utils.logging import get_logger

logger = get_logger("security")

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(
    subject: Any,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    settings = settings or get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=24))
    to_encode = {"exp": expire, "sub": str(subject)}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_user_id(token: str, settings: Optional[Settings] = None) -> Optional[str]:
    """Return the ``sub`` claim of a valid token, or None."""
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        return None
    return payload.get("sub")


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> str:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = decode_user_id(credentials.credentials, settings)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user_id
