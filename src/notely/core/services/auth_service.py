"""Authentication service implementation."""

import re
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...config import get_settings
from ...security import dummy_verify, hash_password, needs_update, verify_password
from ..exceptions import AuthError, ConflictError, ValidationError
from ..logging import get_logger
from ..models.user import User
from ..repositories.access_token_repository import AccessTokenRepository
from ..repositories.user_repository import UserRepository
from ..schemas.auth import LoginRequest, RegisterRequest, UserUpdateRequest
from ..storage import LocalBlobStore, detect_image_type, get_blob_store
from .interfaces import IAuthService

logger = get_logger("auth")

# url-safe base64 as produced by AccessToken.generate_plain_token
_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,255}$")

INVALID_CREDENTIALS = "Invalid credentials"
EMAIL_TAKEN = "The email has already been taken."
PROFILE_PICTURE_DIR = "profile_pictures"


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession, blob_store: Optional[LocalBlobStore] = None):
        self.session = session
        self.user_repo = UserRepository(session)
        self.token_repo = AccessTokenRepository(session)
        self.blob_store = blob_store
        self.settings = get_settings()

    async def register(self, request: RegisterRequest) -> tuple[User, str]:
        """Register new user and issue a token."""
        if await self.user_repo.is_email_taken(request.email):
            raise ConflictError(EMAIL_TAKEN, errors={"email": [EMAIL_TAKEN]})

        user_data = request.profile_data()
        user_data["password_hash"] = hash_password(request.password)

        try:
            user = await self.user_repo.create_user(user_data)
        except IntegrityError:
            # lost a race against a concurrent registration
            await self.session.rollback()
            raise ConflictError(EMAIL_TAKEN, errors={"email": [EMAIL_TAKEN]})

        token = await self.token_repo.create_token(user.id, self.settings.token_name)
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user, token

    async def login(self, request: LoginRequest) -> tuple[User, str]:
        """Check credentials and issue a fresh token.

        Unknown email and wrong password raise the same AuthError.
        """
        user = await self.user_repo.get_by_email(request.email)
        if user is None:
            dummy_verify(request.password)
            logger.info("Login failed")
            raise AuthError(INVALID_CREDENTIALS)

        if not verify_password(request.password, user.password_hash):
            logger.info("Login failed", extra={"user_id": str(user.id)})
            raise AuthError(INVALID_CREDENTIALS)

        if needs_update(user.password_hash):
            user = await self.user_repo.update_user(
                user, {"password_hash": hash_password(request.password)}
            )

        token = await self.token_repo.create_token(user.id, self.settings.token_name)
        logger.info("User logged in", extra={"user_id": str(user.id)})
        return user, token

    async def verify(self, bearer_token: Optional[str]) -> User:
        """Resolve a bearer token to its user. Hits the database every call."""
        if not bearer_token or not _TOKEN_PATTERN.match(bearer_token):
            raise AuthError()

        token = await self.token_repo.get_by_token(bearer_token)
        if token is None:
            raise AuthError()

        user = await self.user_repo.get_by_id(token.user_id)
        if user is None:
            raise AuthError()

        await self.token_repo.touch(token)
        return user

    async def logout(self, bearer_token: Optional[str]) -> User:
        """Revoke exactly the presented token; other devices stay signed in."""
        if not bearer_token:
            raise AuthError("No token provided")

        user = await self.verify(bearer_token)
        if not await self.token_repo.delete_token(bearer_token):
            raise AuthError("Invalid token")

        logger.info("User logged out", extra={"user_id": str(user.id)})
        return user

    async def update_profile(self, user: User, request: UserUpdateRequest) -> User:
        """Update profile fields; the caller may keep their own email."""
        if await self.user_repo.is_email_taken(request.email, exclude_user_id=user.id):
            raise ConflictError(EMAIL_TAKEN, errors={"email": [EMAIL_TAKEN]})

        update_data = request.profile_data()
        if "profile_picture" not in request.model_fields_set:
            # omitted means unchanged, explicit null clears it
            update_data.pop("profile_picture")

        try:
            user = await self.user_repo.update_user(user, update_data)
        except IntegrityError:
            await self.session.rollback()
            raise ConflictError(EMAIL_TAKEN, errors={"email": [EMAIL_TAKEN]})

        logger.info("Profile updated", extra={"user_id": str(user.id)})
        return user

    async def set_profile_picture(self, user: User, image_bytes: bytes, content_type: str) -> str:
        """Validate and store an uploaded picture, then record its URL on the user."""
        if (content_type or "").lower() not in self.settings.allowed_image_types:
            raise ValidationError.for_field(
                "profile_picture", "The profile picture field must be an image."
            )
        if not image_bytes:
            raise ValidationError.for_field(
                "profile_picture", "The profile picture field is required."
            )
        max_kb = self.settings.max_profile_picture_kb
        if len(image_bytes) > max_kb * 1024:
            raise ValidationError.for_field(
                "profile_picture", f"Image file is too large. Maximum size is {max_kb // 1024}MB."
            )
        if detect_image_type(image_bytes) != content_type.lower():
            raise ValidationError.for_field(
                "profile_picture", "The profile picture field must be an image."
            )

        store = self.blob_store or get_blob_store()
        path = await store.put(PROFILE_PICTURE_DIR, image_bytes, content_type.lower())
        url = store.url_for(path)

        await self.user_repo.update_user(user, {"profile_picture": url})
        logger.info("Profile picture stored", extra={"user_id": str(user.id), "path": path})
        return url
