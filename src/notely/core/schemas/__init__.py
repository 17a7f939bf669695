"""
Pydantic schemas for validating and documenting API requests and responses.
"""

from .auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UploadResponse,
    UserDetailResponse,
    UserEnvelope,
    UserResponse,
    UserUpdateRequest,
)
from .common import ErrorResponse, HealthCheckResponse, MessageResponse, PaginationResponse
from .notes import (
    NoteCreate,
    NoteDetailResponse,
    NoteEnvelope,
    NoteListResponse,
    NoteResponse,
    NoteSearchResponse,
    NoteUpdate,
)

__all__ = [
    # Auth schemas
    "LoginRequest",
    "RegisterRequest",
    "UserUpdateRequest",
    "UserResponse",
    "UserEnvelope",
    "UserDetailResponse",
    "AuthResponse",
    "UploadResponse",
    # Note schemas
    "NoteCreate",
    "NoteUpdate",
    "NoteResponse",
    "NoteListResponse",
    "NoteEnvelope",
    "NoteDetailResponse",
    "NoteSearchResponse",
    # Common schemas
    "PaginationResponse",
    "MessageResponse",
    "ErrorResponse",
    "HealthCheckResponse",
]
