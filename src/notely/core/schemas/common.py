"""
Shared response schemas - pagination, envelopes, errors etc
"""

from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class PaginationResponse(BaseModel, Generic[T]):
    """Pagination wrapper for API responses"""

    items: List[T]
    total: int
    page: int
    per_page: int
    pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def create(cls, items: List[T], total: int, page: int, per_page: int) -> "PaginationResponse[T]":
        # calculate page info
        pages = (total + per_page - 1) // per_page

        return cls(
            items=items,
            total=total,
            page=page,
            per_page=per_page,
            pages=pages,
            has_next=page < pages,
            has_prev=page > 1,
        )


class MessageResponse(BaseModel):
    """Bare success envelope."""

    s: bool = Field(default=True, description="Operation success flag")
    message: str = Field(description="Human-readable message")


class ErrorResponse(BaseModel):
    """Standard error body returned by the exception handlers."""

    s: bool = Field(default=False, description="Always false for errors")
    message: str = Field(description="Human-readable error message")
    errors: Optional[Dict[str, List[str]]] = Field(
        default=None, description="Field-level validation messages"
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "s": False,
                "message": "The given data was invalid.",
                "errors": {"email": ["The email field must be a valid email address."]},
            }
        }
    )


class HealthCheckResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(description="Overall health status")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: str = Field(description="Application version")
    checks: dict[str, dict[str, Any]] = Field(description="Individual component health checks")
