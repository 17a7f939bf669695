"""
Service interfaces for the Notely application.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from uuid import UUID

from ..models.user import User
from ..schemas.auth import LoginRequest, RegisterRequest, UserUpdateRequest
from ..schemas.common import HealthCheckResponse
from ..schemas.notes import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate


class IAuthService(ABC):
    """Credential verification and bearer token lifecycle."""

    @abstractmethod
    async def register(self, request: RegisterRequest) -> tuple[User, str]:
        """Create a user and issue their first token."""

    @abstractmethod
    async def login(self, request: LoginRequest) -> tuple[User, str]:
        """Check credentials and issue a fresh token."""

    @abstractmethod
    async def verify(self, bearer_token: Optional[str]) -> User:
        """Resolve a bearer token to its user."""

    @abstractmethod
    async def logout(self, bearer_token: Optional[str]) -> User:
        """Revoke exactly the presented token."""

    @abstractmethod
    async def update_profile(self, user: User, request: UserUpdateRequest) -> User:
        """Update name, email and picture URL."""

    @abstractmethod
    async def set_profile_picture(self, user: User, image_bytes: bytes, content_type: str) -> str:
        """Store an uploaded picture and return its public URL."""


class INoteStore(ABC):
    """Owner-scoped note access."""

    @abstractmethod
    async def list_notes(self, user: User, page: int = 1) -> NoteListResponse:
        """List the caller's notes, newest first."""

    @abstractmethod
    async def create_note(self, user: User, request: NoteCreate) -> NoteResponse:
        """Create a note owned by the caller."""

    @abstractmethod
    async def get_note(self, user: User, note_id: UUID) -> NoteResponse:
        """Get one of the caller's notes."""

    @abstractmethod
    async def update_note(self, user: User, note_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Update one of the caller's notes."""

    @abstractmethod
    async def delete_note(self, user: User, note_id: UUID) -> bool:
        """Delete one of the caller's notes."""

    @abstractmethod
    async def search_notes(self, user: User, query: str, page: int = 1) -> NoteListResponse:
        """Title substring search over the caller's notes."""


class IHealthService(ABC):
    """Health check service."""

    @abstractmethod
    async def get_health_status(self) -> HealthCheckResponse:
        """Overall application health."""

    @abstractmethod
    async def check_database_health(self) -> Dict[str, Any]:
        """Database connectivity."""
