# Opaque bearer tokens (one row per device/session)
import hashlib
import secrets
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel
from .types import GUID

if TYPE_CHECKING:
    from .user import User


class AccessToken(BaseModel):
    """Personal access token. Only the SHA-256 digest is persisted."""

    __tablename__ = "personal_access_tokens"

    user_id: Mapped[uuid.UUID] = mapped_column(
        GUID(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="auth_token")
    token: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    last_used_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="access_tokens", lazy="raise")

    __table_args__ = (
        Index("idx_access_tokens_token", "token"),
        Index("idx_access_tokens_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return f"<AccessToken(user_id={self.user_id}, name={self.name})>"

    @staticmethod
    def generate_plain_token() -> str:
        """Generate a cryptographically secure bearer string."""
        return secrets.token_urlsafe(32)  # 256-bit token

    @staticmethod
    def hash_token(plain_token: str) -> str:
        return hashlib.sha256(plain_token.encode("utf-8")).hexdigest()

    def record_usage(self) -> None:
        """Update last used timestamp."""
        self.last_used_at = datetime.now(timezone.utc)
