from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt as jose_jwt

from oilshop.core.logger import logger
from oilshop.core.settings import settings


def _secret() -> str:
    return settings.JWT_SECRET.get_secret_value()


def create_access_token(
    *,
    user_id: int,
    username: str,
    role: str,
    now: Optional[datetime] = None,
    expires_in: Optional[timedelta] = None,
) -> tuple[str, datetime]:
    """
    Sign a stateless admin token. Returns ``(token, expires_at)``.
    There is no server-side revocation: a token stays valid until ``exp``.
    """
    issued = now or datetime.now(timezone.utc)
    expires_at = issued + (expires_in or timedelta(hours=settings.JWT_EXPIRES_HOURS))
    claims: Dict[str, Any] = {
        "sub": str(user_id),
        "id": user_id,
        "username": username,
        "role": role,
        "iat": int(issued.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    token = jose_jwt.encode(claims, _secret(), algorithm=settings.JWT_ALGORITHM)
    return token, expires_at


def verify_token(token: str) -> Dict[str, Any]:
    """
    Raises:
        ValueError: malformed, badly signed or expired token.
    """
    try:
        claims = jose_jwt.decode(token, _secret(), algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise ValueError("token expired")
    except JWTError as e:
        logger.debug("[JWT] decode failed: %s", e)
        raise ValueError("invalid token")

    if not isinstance(claims.get("id"), int) or not claims.get("username"):
        raise ValueError("invalid token claims")
    return claims
