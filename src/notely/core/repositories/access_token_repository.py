"""Access token repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.access_token import AccessToken


class AccessTokenRepository:
    """Repository for personal access token operations.

    Callers pass the plaintext bearer string; only its digest touches the
    database.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_token(self, user_id: UUID, name: str = "auth_token") -> str:
        """Persist a new token for the user and return its plaintext."""
        plain_token = AccessToken.generate_plain_token()
        token = AccessToken(
            user_id=user_id, name=name, token=AccessToken.hash_token(plain_token)
        )
        self.session.add(token)
        await self.session.commit()
        return plain_token

    async def get_by_token(self, plain_token: str) -> Optional[AccessToken]:
        """Get token row by plaintext bearer string."""
        stmt = select(AccessToken).where(AccessToken.token == AccessToken.hash_token(plain_token))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def touch(self, token: AccessToken) -> None:
        """Record that the token was just used."""
        token.record_usage()
        await self.session.commit()

    async def delete_token(self, plain_token: str) -> bool:
        """Delete exactly one token."""
        stmt = delete(AccessToken).where(AccessToken.token == AccessToken.hash_token(plain_token))
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

