# Note model for user content
import uuid
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .user import User


class Note(BaseModel):
    """A note owned by exactly one user."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # owner reference, never reassigned after insert
    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    owner: Mapped["User"] = relationship("User", back_populates="notes", lazy="raise")

    __table_args__ = (
        CheckConstraint("length(title) > 0", name="ck_notes_title_not_empty"),
        CheckConstraint("length(content) > 0", name="ck_notes_content_not_empty"),
        Index("idx_notes_title", "title"),
        Index("idx_notes_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', user_id={self.user_id})>"

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Check if this note belongs to the given user."""
        return self.user_id == user_id
