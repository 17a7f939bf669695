"""
Database models for the Notely application.

Models included:
    - User: account with email/password authentication
    - Note: note content owned by a single user
    - AccessToken: opaque bearer token issued at login/registration
"""

from .access_token import AccessToken
from .base import BaseModel
from .note import Note
from .user import User

__all__ = [
    "BaseModel",
    "User",
    "Note",
    "AccessToken",
]
