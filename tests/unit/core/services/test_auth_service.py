"""Unit tests for AuthService (src/notely/core/services/auth_service.py)."""

import uuid
from io import BytesIO
from datetime import datetime, timezone

import pytest
from PIL import Image

from notely.core.exceptions import AuthError, ConflictError, ValidationError
from notely.core.models import AccessToken, User
from notely.core.schemas.auth import LoginRequest, RegisterRequest, UserUpdateRequest
from notely.core.services import auth_service
from notely.core.services.auth_service import AuthService
from notely.core.storage import LocalBlobStore


class DummyUser:
    def __init__(self, **kwargs):
        self.__dict__.update(kwargs)


def make_user(**overrides):
    data = dict(
        id=uuid.uuid4(),
        name="Alice",
        email="alice@example.com",
        password_hash="hashed",
        profile_picture=None,
        created_at=datetime.now(timezone.utc),
        updated_at=datetime.now(timezone.utc),
    )
    data.update(overrides)
    return DummyUser(**data)


class FakeUserRepo:
    def __init__(self, users=None, taken=False):
        self.users = {u.email: u for u in (users or [])}
        self.taken = taken
        self.updates = []

    async def is_email_taken(self, email, exclude_user_id=None):
        if self.taken:
            return True
        user = self.users.get(email)
        return user is not None and user.id != exclude_user_id

    async def create_user(self, user_data):
        user = make_user(**user_data)
        self.users[user.email] = user
        return user

    async def get_by_email(self, email):
        return self.users.get(email)

    async def get_by_id(self, user_id):
        return next((u for u in self.users.values() if u.id == user_id), None)

    async def update_user(self, user, update_data):
        self.updates.append(update_data)
        for key, value in update_data.items():
            setattr(user, key, value)
        return user


class FakeTokenRepo:
    def __init__(self):
        self.tokens = {}
        self.touched = []

    async def create_token(self, user_id, name="auth_token"):
        plain = AccessToken.generate_plain_token()
        self.tokens[plain] = DummyUser(user_id=user_id, name=name)
        return plain

    async def get_by_token(self, plain_token):
        return self.tokens.get(plain_token)

    async def touch(self, token):
        self.touched.append(token)

    async def delete_token(self, plain_token):
        return self.tokens.pop(plain_token, None) is not None


@pytest.fixture
def fakes(monkeypatch):
    user_repo = FakeUserRepo()
    token_repo = FakeTokenRepo()
    monkeypatch.setattr(auth_service, "UserRepository", lambda s: user_repo)
    monkeypatch.setattr(auth_service, "AccessTokenRepository", lambda s: token_repo)
    # Patch hashing to be deterministic
    monkeypatch.setattr(auth_service, "hash_password", lambda p: f"hashed:{p}")
    monkeypatch.setattr(auth_service, "verify_password", lambda p, h: h == f"hashed:{p}")
    monkeypatch.setattr(auth_service, "needs_update", lambda h: False)
    return user_repo, token_repo


@pytest.mark.asyncio
async def test_register_user(fakes):
    user_repo, token_repo = fakes
    svc = AuthService(session=None)

    user, token = await svc.register(
        RegisterRequest(name="Alice", email="Alice@Example.com", password="password123")
    )

    assert user.email == "alice@example.com"
    assert user.password_hash == "hashed:password123"
    assert token in token_repo.tokens
    assert token_repo.tokens[token].user_id == user.id


@pytest.mark.asyncio
async def test_register_duplicate_email(fakes):
    user_repo, _ = fakes
    user_repo.taken = True
    svc = AuthService(session=None)

    with pytest.raises(ConflictError) as exc:
        await svc.register(
            RegisterRequest(name="Alice", email="alice@example.com", password="password123")
        )
    assert exc.value.http_status == 409
    assert exc.value.details["errors"] == {"email": ["The email has already been taken."]}


@pytest.mark.asyncio
async def test_login_issues_fresh_token(fakes):
    user_repo, token_repo = fakes
    svc = AuthService(session=None)
    _, first = await svc.register(
        RegisterRequest(name="Alice", email="alice@example.com", password="password123")
    )

    user, second = await svc.login(LoginRequest(email="alice@example.com", password="password123"))

    assert user.email == "alice@example.com"
    assert second != first
    # earlier tokens stay valid
    assert first in token_repo.tokens and second in token_repo.tokens


@pytest.mark.asyncio
async def test_login_failures_are_indistinguishable(fakes, monkeypatch):
    calls = []
    monkeypatch.setattr(auth_service, "dummy_verify", lambda p: calls.append(p) or False)
    svc = AuthService(session=None)
    await svc.register(
        RegisterRequest(name="Alice", email="alice@example.com", password="password123")
    )

    with pytest.raises(AuthError) as unknown:
        await svc.login(LoginRequest(email="nobody@example.com", password="password123"))
    with pytest.raises(AuthError) as wrong:
        await svc.login(LoginRequest(email="alice@example.com", password="wrongpass"))

    assert unknown.value.message == wrong.value.message == "Invalid credentials"
    assert unknown.value.to_response() == wrong.value.to_response()
    assert calls == ["password123"]


@pytest.mark.asyncio
async def test_login_rehashes_outdated_hash(fakes, monkeypatch):
    user_repo, _ = fakes
    monkeypatch.setattr(auth_service, "needs_update", lambda h: True)
    svc = AuthService(session=None)
    await svc.register(
        RegisterRequest(name="Alice", email="alice@example.com", password="password123")
    )

    await svc.login(LoginRequest(email="alice@example.com", password="password123"))
    assert user_repo.updates == [{"password_hash": "hashed:password123"}]


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_token", [None, "", "short", "has spaces in it ....", "x" * 300])
async def test_verify_rejects_malformed_tokens(fakes, bad_token):
    svc = AuthService(session=None)
    with pytest.raises(AuthError) as exc:
        await svc.verify(bad_token)
    assert exc.value.message == "Unauthenticated"


@pytest.mark.asyncio
async def test_verify_unknown_token(fakes):
    svc = AuthService(session=None)
    with pytest.raises(AuthError):
        await svc.verify(AccessToken.generate_plain_token())


@pytest.mark.asyncio
async def test_verify_resolves_user_and_touches_token(fakes):
    _, token_repo = fakes
    svc = AuthService(session=None)
    user, token = await svc.register(
        RegisterRequest(name="Alice", email="alice@example.com", password="password123")
    )

    resolved = await svc.verify(token)
    assert resolved is user
    assert token_repo.touched == [token_repo.tokens[token]]


@pytest.mark.asyncio
async def test_logout_without_token(fakes):
    svc = AuthService(session=None)
    with pytest.raises(AuthError) as exc:
        await svc.logout(None)
    assert exc.value.message == "No token provided"


@pytest.mark.asyncio
async def test_logout_revokes_only_presented_token(fakes):
    _, token_repo = fakes
    svc = AuthService(session=None)
    user, first = await svc.register(
        RegisterRequest(name="Alice", email="alice@example.com", password="password123")
    )
    _, second = await svc.login(LoginRequest(email="alice@example.com", password="password123"))

    assert await svc.logout(first) is user

    with pytest.raises(AuthError):
        await svc.verify(first)
    assert await svc.verify(second) is user


@pytest.mark.asyncio
async def test_update_profile_conflict_with_other_user(fakes):
    user_repo, _ = fakes
    alice = make_user()
    bob = make_user(name="Bob", email="bob@example.com")
    user_repo.users = {alice.email: alice, bob.email: bob}
    svc = AuthService(session=None)

    with pytest.raises(ConflictError):
        await svc.update_profile(alice, UserUpdateRequest(name="Alice", email="bob@example.com"))


@pytest.mark.asyncio
async def test_update_profile_keeps_own_email_and_picture(fakes):
    user_repo, _ = fakes
    alice = make_user(profile_picture="http://test/storage/profile_pictures/a.png")
    user_repo.users = {alice.email: alice}
    svc = AuthService(session=None)

    updated = await svc.update_profile(
        alice, UserUpdateRequest(name="Alice Liddell", email="alice@example.com")
    )

    assert updated.name == "Alice Liddell"
    assert updated.profile_picture == "http://test/storage/profile_pictures/a.png"
    assert "profile_picture" not in user_repo.updates[-1]


@pytest.mark.asyncio
async def test_update_profile_explicit_null_clears_picture(fakes):
    user_repo, _ = fakes
    alice = make_user(profile_picture="http://test/storage/profile_pictures/a.png")
    user_repo.users = {alice.email: alice}
    svc = AuthService(session=None)

    updated = await svc.update_profile(
        alice, UserUpdateRequest(name="Alice", email="alice@example.com", profile_picture=None)
    )
    assert updated.profile_picture is None


def _image(image_format):
    buf = BytesIO()
    Image.new("RGB", (4, 4), (10, 120, 200)).save(buf, format=image_format)
    return buf.getvalue()


@pytest.mark.asyncio
async def test_set_profile_picture_stores_blob(fakes, tmp_path):
    user_repo, _ = fakes
    alice = make_user()
    store = LocalBlobStore(str(tmp_path), "http://test/storage")
    svc = AuthService(session=None, blob_store=store)
    png = _image("PNG")

    url = await svc.set_profile_picture(alice, png, "image/png")

    assert url.startswith("http://test/storage/profile_pictures/")
    assert url.endswith(".png")
    assert alice.profile_picture == url
    stored = list((tmp_path / "profile_pictures").iterdir())
    assert len(stored) == 1 and stored[0].read_bytes() == png


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data, content_type, message",
    [
        (b"hello", "text/plain", "The profile picture field must be an image."),
        (b"", "image/png", "The profile picture field is required."),
        (b"x" * (2048 * 1024 + 1), "image/jpeg", "Image file is too large. Maximum size is 2MB."),
        # declared image type, but the bytes are not an image
        (b"<html><script>alert(1)</script></html>", "image/png", "The profile picture field must be an image."),
        # real image, wrong declared type
        (_image("PNG"), "image/jpeg", "The profile picture field must be an image."),
        (b'<svg xmlns="http://www.w3.org/2000/svg"><script>alert(1)</script></svg>', "image/svg+xml", "The profile picture field must be an image."),
    ],
)
async def test_set_profile_picture_rejects(fakes, tmp_path, data, content_type, message):
    user_repo, _ = fakes
    store = LocalBlobStore(str(tmp_path), "http://test/storage")
    svc = AuthService(session=None, blob_store=store)

    with pytest.raises(ValidationError) as exc:
        await svc.set_profile_picture(make_user(), data, content_type)

    assert exc.value.details["errors"] == {"profile_picture": [message]}
    assert user_repo.updates == []
    assert not (tmp_path / "profile_pictures").exists()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "image_format, content_type",
    [("JPEG", "image/jpeg"), ("GIF", "image/gif"), ("BMP", "image/bmp"), ("WEBP", "image/webp")],
)
async def test_set_profile_picture_accepts_raster_formats(
    fakes, tmp_path, image_format, content_type
):
    store = LocalBlobStore(str(tmp_path), "http://test/storage")
    svc = AuthService(session=None, blob_store=store)
    url = await svc.set_profile_picture(make_user(), _image(image_format), content_type)
    assert url.startswith("http://test/storage/profile_pictures/")


@pytest.mark.asyncio
async def test_set_profile_picture_accepts_exactly_two_megabytes(fakes, tmp_path):
    store = LocalBlobStore(str(tmp_path), "http://test/storage")
    svc = AuthService(session=None, blob_store=store)
    png = _image("PNG")
    # bytes after IEND are ignored by decoders
    padded = png + b"\0" * (2048 * 1024 - len(png))

    url = await svc.set_profile_picture(make_user(), padded, "image/png")
    assert url.endswith(".png")


# Against a real (SQLite) database


@pytest.mark.asyncio
async def test_register_and_verify_with_database(test_session):
    svc = AuthService(test_session)
    user, token = await svc.register(
        RegisterRequest(name="Alice", email="alice@example.com", password="password123")
    )

    assert isinstance(user, User)
    assert user.password_hash != "password123"
    assert (await svc.verify(token)).id == user.id


@pytest.mark.asyncio
async def test_register_same_email_twice_with_database(test_session):
    svc = AuthService(test_session)
    await svc.register(RegisterRequest(name="Alice", email="alice@example.com", password="password123"))

    with pytest.raises(ConflictError):
        await svc.register(
            RegisterRequest(name="Other", email="ALICE@example.com", password="password456")
        )


@pytest.mark.asyncio
async def test_logout_then_verify_fails_with_database(test_session):
    svc = AuthService(test_session)
    _, token = await svc.register(
        RegisterRequest(name="Alice", email="alice@example.com", password="password123")
    )

    await svc.logout(token)
    with pytest.raises(AuthError):
        await svc.verify(token)
    with pytest.raises(AuthError):
        await svc.logout(token)
