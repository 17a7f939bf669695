"""Repository layer for data access."""

from .access_token_repository import AccessTokenRepository
from .note_repository import NoteRepository
from .user_repository import UserRepository

__all__ = [
    "UserRepository",
    "NoteRepository",
    "AccessTokenRepository",
]
