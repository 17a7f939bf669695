"""
Note management schemas.

Create and update requests are explicit allow-lists: any other key in the
request body (``user_id``, ``id``...) is dropped during parsing.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import PaginationResponse


class NoteCreate(BaseModel):
    """Note creation request schema."""

    title: str = Field(min_length=1, max_length=255, description="Note title")
    content: str = Field(min_length=1, description="Note content")

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Field cannot be blank")
        return v

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"title": "Shopping", "content": "milk, eggs"}},
    )


class NoteUpdate(BaseModel):
    """Note update request schema. Omitted fields stay unchanged."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)

    @field_validator("title", "content")
    @classmethod
    def validate_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Field cannot be blank")
        return v

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"title": "Shopping list", "content": "milk, eggs, bread"}},
    )

    def changes(self) -> dict:
        """Return only the fields the caller actually supplied."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class NoteResponse(BaseModel):
    """Note response schema."""

    id: uuid.UUID = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    user_id: uuid.UUID = Field(description="Owner ID")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)


NoteListResponse = PaginationResponse[NoteResponse]


class NoteEnvelope(BaseModel):
    """Envelope for note mutations."""

    s: bool = Field(default=True)
    message: str
    note: NoteResponse


class NoteDetailResponse(BaseModel):
    note: NoteResponse


class NoteSearchResponse(BaseModel):
    notes: NoteListResponse
