"""Bearer token authentication dependencies."""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.models.user import User
from ..core.services import AuthService
from ..database import get_db_session


class BearerToken(HTTPBearer):
    """Extracts the raw token from ``Authorization: Bearer <token>``.

    Never rejects by itself; a missing header or other scheme yields None and
    AuthService decides what that means.
    """

    def __init__(self):
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> Optional[str]:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        return credentials.credentials if credentials else None


bearer_token = BearerToken()


async def get_current_user(
    token: Optional[str] = Depends(bearer_token),
    session: AsyncSession = Depends(get_db_session),
) -> User:
    """Resolve the request's bearer token to a user, once per request."""
    return await AuthService(session).verify(token)
