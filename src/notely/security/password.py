"""Password hashing utilities."""

from passlib.context import CryptContext

# bcrypt_sha256 pre-hashes with SHA-256 so long passwords are not truncated at 72 bytes
pwd_context = CryptContext(schemes=["bcrypt_sha256"], deprecated="auto")

# Verified against when the email is unknown so both login failures cost the same
_DUMMY_HASH = pwd_context.hash("notely-dummy-password")


def hash_password(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify(plain_password: str) -> bool:
    """Burn one hash comparison; always False."""
    pwd_context.verify(plain_password, _DUMMY_HASH)
    return False


def needs_update(hashed_password: str) -> bool:
    """Check if password hash needs updating."""
    return pwd_context.needs_update(hashed_password)
