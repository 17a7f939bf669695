"""
Service layer interfaces and implementations.
"""

from .auth_service import AuthService
from .health_service import HealthService
from .interfaces import IAuthService, IHealthService, INoteStore
from .note_store import NoteStore

__all__ = [
    # Interfaces
    "IAuthService",
    "INoteStore",
    "IHealthService",
    # Implementations
    "AuthService",
    "NoteStore",
    "HealthService",
]
