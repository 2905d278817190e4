"""Identity token handling.

Tokens are issued by the identity provider and signed with the shared
``AUTH_SECRET``. The API only verifies them and reads the subject and the
profile claims.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import JWTError, jwt

from orelse.core.config import settings

USER_ID_MAX_LENGTH = 255


@dataclass(frozen=True)
class Principal:
    """Authenticated caller, built once per request."""

    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None


def create_access_token(
    subject: str | Any,
    expires_delta: Optional[timedelta] = None,
    **profile: Optional[str],
) -> str:
    """Create a signed access token carrying the subject and profile claims."""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )

    to_encode = {
        "sub": str(subject),
        "exp": expire,
        "type": "access",
    }
    to_encode.update({k: v for k, v in profile.items() if v is not None})
    return jwt.encode(to_encode, settings.AUTH_SECRET, algorithm=settings.AUTH_ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """Decode and validate a token."""
    try:
        payload = jwt.decode(
            token, settings.AUTH_SECRET, algorithms=[settings.AUTH_ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def principal_from_claims(payload: dict) -> Optional[Principal]:
    """Build a principal from decoded claims, or None without a stable id."""
    if payload.get("type", "access") != "access":
        return None

    # Subjects are opaque strings, e.g. cuids issued by the identity provider
    subject = payload.get("sub") or payload.get("id")
    user_id = str(subject).strip() if subject is not None else ""
    if not user_id or len(user_id) > USER_ID_MAX_LENGTH:
        return None

    return Principal(
        id=user_id,
        email=payload.get("email"),
        name=payload.get("name"),
        image=payload.get("picture") or payload.get("image"),
    )
