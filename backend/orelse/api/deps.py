"""Request dependencies: identity resolution."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from orelse.core.exceptions import NotAuthenticatedError
from orelse.core.security import Principal, decode_token, principal_from_claims

bearer_scheme = HTTPBearer(auto_error=False)


async def get_optional_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Principal]:
    """Resolve the caller from the bearer token, or None when anonymous."""
    if credentials is None or not credentials.credentials:
        return None

    payload = decode_token(credentials.credentials)
    if payload is None:
        return None

    return principal_from_claims(payload)


async def get_current_principal(
    principal: Optional[Principal] = Depends(get_optional_principal),
) -> Principal:
    """Require an authenticated caller with a stable id."""
    if principal is None:
        raise NotAuthenticatedError()
    return principal
