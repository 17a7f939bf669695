"""
User model for authentication.
"""

from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel

if TYPE_CHECKING:
    from .access_token import AccessToken
    from .note import Note


class User(BaseModel):
    """User account authenticated by email and password."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    profile_picture: Mapped[Optional[str]] = mapped_column(String(2048), nullable=True)

    # Relations
    notes: Mapped[List["Note"]] = relationship(
        "Note",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    access_tokens: Mapped[List["AccessToken"]] = relationship(
        "AccessToken",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="raise",
    )

    __table_args__ = (
        # Enforce max lengths at DB level (SQLite compatible)
        CheckConstraint("length(name) <= 255", name="ck_users_name_len"),
        CheckConstraint("length(email) <= 255", name="ck_users_email_len"),
        Index("idx_users_email", "email"),
    )

    def __repr__(self) -> str:
        return f"<User(email='{self.email}')>"
